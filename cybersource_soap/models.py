"""Request models for CyberSource ``runTransaction`` calls.

Each model renders to the nested dict zeep expects for the
``requestMessage`` type. XML attributes such as ``run="true"`` are plain keys.
"""
import time
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional, Tuple, Union

Amount = Union[Decimal, int, float, str]


def format_amount(amount: Amount) -> str:
    """Format an amount with exactly two decimals (``100`` -> ``"100.00"``)."""
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{value:.2f}"


def split_full_name(full_name: str) -> Tuple[Optional[str], Optional[str]]:
    """Split ``"John Doe"`` or ``"John M Doe"`` into first and last name."""
    parts = full_name.split(" ")
    if len(parts) == 2:
        return parts[0], parts[1]
    if len(parts) >= 3:
        return parts[0], parts[2]
    return None, None


def _run(run: bool = True) -> Dict[str, str]:
    return {"run": "true" if run else "false"}


@dataclass
class BillTo:
    first_name: str
    last_name: str
    street1: str
    city: str
    state: str
    postal_code: str
    country: str
    email: str
    phone_number: Optional[str] = None
    ip_address: Optional[str] = None
    customer_id: Optional[str] = None

    @classmethod
    def from_full_name(cls, full_name: str, **kwargs) -> "BillTo":
        first_name, last_name = split_full_name(full_name)
        return cls(first_name=first_name, last_name=last_name, **kwargs)

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "street1": self.street1,
            "city": self.city,
            "state": self.state,
            "postalCode": self.postal_code,
            "country": self.country,
            "email": self.email,
        }
        if self.phone_number:
            payload["phoneNumber"] = self.phone_number
        if self.ip_address:
            payload["ipAddress"] = self.ip_address
        if self.customer_id is not None:
            payload["customerID"] = self.customer_id
        return payload


@dataclass
class Card:
    account_number: str
    expiration_month: str
    expiration_year: str
    cv_number: Optional[str] = None
    card_type: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "accountNumber": self.account_number,
            "expirationMonth": self.expiration_month,
            "expirationYear": self.expiration_year,
            "cvNumber": self.cv_number,
        }
        if self.card_type:
            payload["cardType"] = self.card_type
        return payload


@dataclass
class PurchaseTotals:
    currency: str
    grand_total_amount: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {"currency": self.currency, "grandTotalAmount": self.grand_total_amount}

    def currency_only(self) -> Dict[str, Any]:
        return {"currency": self.currency}


@dataclass
class CCAuthService:
    run: bool = True

    def to_payload(self) -> Dict[str, str]:
        return _run(self.run)


@dataclass
class AuthorizationRequest:
    merchant_reference_code: str
    bill_to: BillTo
    card: Card
    purchase_totals: Optional[PurchaseTotals] = None
    cc_auth_service: CCAuthService = field(default_factory=CCAuthService)
    merchant_id: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "merchantID": self.merchant_id,
            "merchantReferenceCode": self.merchant_reference_code,
            "billTo": self.bill_to.to_payload(),
            "purchaseTotals": self.purchase_totals.to_payload(),
            "card": self.card.to_payload(),
            "ccAuthService": self.cc_auth_service.to_payload(),
        }


@dataclass
class CaptureRequest:
    merchant_reference_code: str
    authorization: str
    purchase_totals: Optional[PurchaseTotals] = None
    merchant_id: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "merchantID": self.merchant_id,
            "merchantReferenceCode": self.merchant_reference_code,
            "purchaseTotals": self.purchase_totals.to_payload(),
            "ccCaptureService": {**_run(), "authRequestID": self.authorization},
        }


@dataclass
class ChargeRequest:
    """Authorization and capture in a single transaction."""

    merchant_reference_code: str
    bill_to: BillTo
    card: Card
    purchase_totals: Optional[PurchaseTotals] = None
    merchant_id: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "merchantID": self.merchant_id,
            "merchantReferenceCode": self.merchant_reference_code,
            "billTo": self.bill_to.to_payload(),
            "purchaseTotals": self.purchase_totals.to_payload(),
            "card": self.card.to_payload(),
            "ccAuthService": _run(),
            "ccCaptureService": _run(),
        }


@dataclass
class SubscriptionRequest:
    """Tokenizes a card as a recurring subscription profile."""

    merchant_reference_code: str
    bill_to: BillTo
    card: Card
    amount: Optional[Amount] = None
    number_of_payments: Optional[int] = None
    start_date: Optional[str] = None
    automatic_renew: Optional[bool] = None
    frequency: Optional[str] = None
    purchase_totals: Optional[PurchaseTotals] = None
    merchant_id: Optional[str] = None

    def recurring_subscription_info(self) -> Dict[str, Any]:
        info = {
            "amount": str(self.amount) if self.amount is not None else None,
            "numberOfPayments": self.number_of_payments,
            "automaticRenew": None if self.automatic_renew is None else _run(self.automatic_renew)["run"],
            "frequency": self.frequency,
            "startDate": self.start_date,
        }
        return {key: value for key, value in info.items() if value is not None}

    def to_payload(self) -> Dict[str, Any]:
        return {
            "merchantID": self.merchant_id,
            "merchantReferenceCode": self.merchant_reference_code,
            "billTo": self.bill_to.to_payload(),
            "purchaseTotals": self.purchase_totals.currency_only(),
            "card": self.card.to_payload(),
            "recurringSubscriptionInfo": self.recurring_subscription_info(),
            "paySubscriptionCreateService": _run(),
        }


@dataclass
class SubscriptionInfoRequest:
    subscription_id: str
    currency: str = "USD"
    merchant_reference_code: str = ""
    merchant_id: Optional[str] = None

    def __post_init__(self):
        if not self.subscription_id:
            raise ValueError("subscription_id is required for SubscriptionInfoRequest")
        if not self.merchant_reference_code:
            self.merchant_reference_code = f"SI-{int(time.time() * 1000)}"

    @property
    def purchase_totals(self) -> PurchaseTotals:
        return PurchaseTotals(self.currency, "0.00")

    def to_payload(self) -> Dict[str, Any]:
        return {
            "merchantID": self.merchant_id,
            "merchantReferenceCode": self.merchant_reference_code,
            "purchaseTotals": self.purchase_totals.currency_only(),
            "recurringSubscriptionInfo": {"subscriptionID": self.subscription_id},
            "paySubscriptionRetrieveService": _run(),
        }


@dataclass
class ChargeSubscriptionRequest:
    """Charges a previously tokenized card (subscription ID)."""

    merchant_reference_code: str
    token: str
    purchase_totals: Optional[PurchaseTotals] = None
    merchant_id: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "merchantID": self.merchant_id,
            "merchantReferenceCode": self.merchant_reference_code,
            "purchaseTotals": self.purchase_totals.to_payload(),
            "recurringSubscriptionInfo": {"subscriptionID": self.token, "frequency": "on-demand"},
            "ccAuthService": _run(),
            "ccCaptureService": _run(),
        }
