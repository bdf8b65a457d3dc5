import os
import logging
from cybersource_soap import (
    AuthorizationRequest,
    BillTo,
    CaptureRequest,
    Card,
    CertificateOptions,
    CyberSourceClient,
    CyberSourceConfig,
    CyberSourceError,
)

logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger("example_p12")

def main():
    # X.509 signed requests from a P12 issued in the Business Center.
    # Leave cert_options=None to read DEV_CYBERSOURCE_P12_PATH / DEV_CYBERSOURCE_P12_PASSPHRASE instead.
    cfg = CyberSourceConfig(
        password="",
        merchant_id=os.getenv("CYBERSOURCE_MERCHANT_ID", "your-merchant-id"),
        environment="development",
        cert_options=CertificateOptions(
            p12_path=os.getenv("CYBERSOURCE_P12", "CERTIFICATES/certificate.p12"),
            p12_passphrase=os.getenv("CYBERSOURCE_P12_PASSPHRASE", ""),
        ),
    )
    client = CyberSourceClient(cfg)
    logger.info("Security mode: %s", client.get_ws_security().kind)

    bill_to = BillTo.from_full_name(
        "Jane Q Public",
        street1="1295 Charleston Rd",
        city="Mountain View",
        state="CA",
        postal_code="94043",
        country="US",
        email="jane@example.com",
    )
    card = Card("4111111111111111", "12", "2031", "123")

    try:
        auth = client.authorize_charge(AuthorizationRequest("ORDER-2001", bill_to, card), 10)
        logger.info(f"Authorized: {auth.authorization}")
        capture = client.capture_charge(CaptureRequest("ORDER-2001", auth.authorization), 10)
        logger.info(f"Captured: {capture.message}")
    except CyberSourceError as e:
        logger.error(f"Transaction failed: {e}")

if __name__ == "__main__":
    main()
