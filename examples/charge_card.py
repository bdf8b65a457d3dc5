import os
import logging
from cybersource_soap import BillTo, Card, ChargeRequest, CyberSourceClient, CyberSourceConfig, CyberSourceError

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("example_charge")

def main():
    # UsernameToken authentication with the SOAP transaction key
    cfg = CyberSourceConfig(
        password=os.getenv("CYBERSOURCE_TRANSACTION_KEY", "your-transaction-key"),
        merchant_id=os.getenv("CYBERSOURCE_MERCHANT_ID", "your-merchant-id"),
        environment="development",
    )
    client = CyberSourceClient(cfg)

    bill_to = BillTo("John", "Doe", "1295 Charleston Rd", "Mountain View", "CA", "94043", "US", "john@example.com")
    card = Card("4111111111111111", "12", "2031", "123")

    try:
        result = client.charge_card(ChargeRequest("ORDER-1001", bill_to, card), 25.00)
        logger.info(f"Charge approved: {result.message} (code {result.code})")
    except CyberSourceError as e:
        logger.error(f"Charge failed: {e}")

if __name__ == "__main__":
    main()
