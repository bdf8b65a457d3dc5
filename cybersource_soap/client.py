from typing import Any, Mapping, Optional

import requests

from .api import transactions
from .api.transactions import TransactionResult
from .config import CyberSourceConfig
from .models import (
    Amount,
    AuthorizationRequest,
    CaptureRequest,
    ChargeRequest,
    ChargeSubscriptionRequest,
    SubscriptionInfoRequest,
    SubscriptionRequest,
)
from .security import SecurityDescriptor, security_descriptor
from .soap.client import SoapClient


class CyberSourceClient:
    """Thin wrapper around the CyberSource transaction processor (SOAP).

    Credentials are resolved on every call, from ``cfg.cert_options`` or the
    ``{PROD,DEV}_CYBERSOURCE_*`` variables in ``environ`` (``os.environ`` by
    default), falling back to a UsernameToken with the transaction key.
    """

    def __init__(
        self,
        cfg: CyberSourceConfig,
        *,
        session: Optional[requests.Session] = None,
        service=None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.cfg = cfg
        self.environ = environ
        self._session = session or requests.Session()
        if not cfg.verify_ssl:
            self._session.verify = False  # noqa: S501 (only for test gateways)

        self.soap_client = SoapClient(cfg, self._session, service=service)

    def get_ws_security(self) -> SecurityDescriptor:
        """The security descriptor the next request would be sent with."""
        return security_descriptor(self.cfg, self.environ)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def normal_request(self, request: Mapping[str, Any]) -> TransactionResult:
        return transactions.normal_request(self.cfg, self.soap_client, request, environ=self.environ)

    def authorize_charge(self, request: AuthorizationRequest, amount: Amount) -> TransactionResult:
        """Authorize without capturing; ``result.authorization`` feeds :meth:`capture_charge`."""
        return transactions.authorize_charge(self.cfg, self.soap_client, request, amount, environ=self.environ)

    def capture_charge(self, request: CaptureRequest, amount: Amount) -> TransactionResult:
        return transactions.capture_charge(self.cfg, self.soap_client, request, amount, environ=self.environ)

    def subscribe_card(self, request: SubscriptionRequest) -> TransactionResult:
        """Tokenize a card; ``result.token`` is the subscription ID."""
        return transactions.subscribe_card(self.cfg, self.soap_client, request, environ=self.environ)

    def get_subscription_info(self, request: SubscriptionInfoRequest) -> TransactionResult:
        return transactions.get_subscription_info(self.cfg, self.soap_client, request, environ=self.environ)

    def charge_subscribed_card(self, request: ChargeSubscriptionRequest, amount: Amount) -> TransactionResult:
        return transactions.charge_subscribed_card(self.cfg, self.soap_client, request, amount, environ=self.environ)

    def charge_card(self, request: ChargeRequest, amount: Amount) -> TransactionResult:
        """Authorize and capture in a single transaction."""
        return transactions.charge_card(self.cfg, self.soap_client, request, amount, environ=self.environ)
