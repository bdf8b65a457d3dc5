import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from zeep.helpers import serialize_object

from ..config import CyberSourceConfig
from ..errors import ConfigurationError, CyberSourceTransactionError, CyberSourceTransportError
from ..models import (
    Amount,
    AuthorizationRequest,
    CaptureRequest,
    ChargeRequest,
    ChargeSubscriptionRequest,
    PurchaseTotals,
    SubscriptionInfoRequest,
    SubscriptionRequest,
    format_amount,
)
from ..reason_codes import ReasonCodes
from ..security import security_descriptor
from ..soap.client import SoapClient
from ..soap.signature import build_wsse

logger = logging.getLogger(__name__)

SUCCESS = 100
CLIENT_ERROR = 500


@dataclass(frozen=True)
class TransactionResult:
    message: Optional[str]
    code: int
    data: Optional[Mapping[str, Any]] = None
    authorization: Optional[str] = None
    token: Optional[str] = None
    subscription_info: Optional[Mapping[str, Any]] = None


def _message(cfg: CyberSourceConfig, code) -> str:
    return ReasonCodes(cfg.language).get_message(code) or f"CyberSource reason code {code}"


def _reason_code(reply: Mapping[str, Any]) -> Optional[int]:
    code = reply.get("reasonCode") if reply else None
    try:
        return int(code)
    except (TypeError, ValueError):
        return None


def run_transaction(
    cfg: CyberSourceConfig,
    soap_client: SoapClient,
    request: Mapping[str, Any],
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Mapping[str, Any]:
    """Sign and send one request, returning the reply as a plain dict.

    Credential errors are raised before anything is sent.
    """
    wsse = build_wsse(security_descriptor(cfg, environ))
    try:
        response = soap_client.run_transaction(request, wsse)
    except ConfigurationError:
        raise
    except Exception as exc:
        raise CyberSourceTransportError(_message(cfg, CLIENT_ERROR), code=CLIENT_ERROR) from exc
    data = serialize_object(response) if response is not None else {}
    return data if isinstance(data, Mapping) else {}


def _rejected(cfg: CyberSourceConfig, code: Optional[int], data) -> CyberSourceTransactionError:
    return CyberSourceTransactionError(_message(cfg, code), code=code, response=data)


def _checked(cfg, soap_client, request, environ) -> Mapping[str, Any]:
    reply = run_transaction(cfg, soap_client, request, environ=environ)
    code = _reason_code(reply)
    if code != SUCCESS:
        raise _rejected(cfg, code, reply)
    return reply


def _prepare(cfg: CyberSourceConfig, request, amount: Optional[Amount]):
    if amount is not None:
        request.purchase_totals = PurchaseTotals(cfg.currency, format_amount(amount))
    request.merchant_id = cfg.merchant_id


def normal_request(
    cfg: CyberSourceConfig,
    soap_client: SoapClient,
    request: Mapping[str, Any],
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> TransactionResult:
    """Send a hand-built request dict."""
    reply = _checked(cfg, soap_client, request, environ)
    return TransactionResult(message=_message(cfg, SUCCESS), code=SUCCESS, data=reply)


def authorize_charge(
    cfg: CyberSourceConfig,
    soap_client: SoapClient,
    request: AuthorizationRequest,
    amount: Amount,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> TransactionResult:
    """Authorize ``amount`` without capturing it; returns the authorization request ID."""
    _prepare(cfg, request, amount)
    reply = _checked(cfg, soap_client, request.to_payload(), environ)
    auth_reply = reply.get("ccAuthReply") or {}
    auth_code = _reason_code(auth_reply)
    if auth_code != SUCCESS:
        raise _rejected(cfg, auth_code, auth_reply)
    logger.info("Authorized %s for %s", request.merchant_reference_code, request.purchase_totals.grand_total_amount)
    return TransactionResult(
        message=_message(cfg, auth_code),
        code=auth_code,
        authorization=reply.get("requestID"),
    )


def capture_charge(
    cfg: CyberSourceConfig,
    soap_client: SoapClient,
    request: CaptureRequest,
    amount: Amount,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> TransactionResult:
    _prepare(cfg, request, amount)
    _checked(cfg, soap_client, request.to_payload(), environ)
    return TransactionResult(message=_message(cfg, SUCCESS), code=SUCCESS)


def charge_card(
    cfg: CyberSourceConfig,
    soap_client: SoapClient,
    request: ChargeRequest,
    amount: Amount,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> TransactionResult:
    """Authorize and capture in one step."""
    _prepare(cfg, request, amount)
    _checked(cfg, soap_client, request.to_payload(), environ)
    return TransactionResult(message=_message(cfg, SUCCESS), code=SUCCESS)


def subscribe_card(
    cfg: CyberSourceConfig,
    soap_client: SoapClient,
    request: SubscriptionRequest,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> TransactionResult:
    """Tokenize a card; the returned token is the subscription request ID."""
    amount = str(request.amount) if request.amount is not None else "0.00"
    request.purchase_totals = PurchaseTotals(cfg.currency, amount)
    _prepare(cfg, request, None)
    reply = _checked(cfg, soap_client, request.to_payload(), environ)
    return TransactionResult(message=_message(cfg, SUCCESS), code=SUCCESS, token=reply.get("requestID"))


def get_subscription_info(
    cfg: CyberSourceConfig,
    soap_client: SoapClient,
    request: SubscriptionInfoRequest,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> TransactionResult:
    _prepare(cfg, request, None)
    reply = _checked(cfg, soap_client, request.to_payload(), environ)
    return TransactionResult(message=_message(cfg, SUCCESS), code=SUCCESS, subscription_info=reply)


def charge_subscribed_card(
    cfg: CyberSourceConfig,
    soap_client: SoapClient,
    request: ChargeSubscriptionRequest,
    amount: Amount,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> TransactionResult:
    _prepare(cfg, request, amount)
    _checked(cfg, soap_client, request.to_payload(), environ)
    return TransactionResult(message=_message(cfg, SUCCESS), code=SUCCESS)
