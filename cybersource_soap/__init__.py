"""CyberSource SOAP toolkit: UsernameToken or X.509 (P12/PEM) signed transactions."""
from .client import CyberSourceClient
from .config import CertificateOptions, CyberSourceConfig
from .credentials import EnvironmentView, resolve_cert_options
from .errors import (
    CertificateParseError,
    ConfigurationError,
    CyberSourceError,
    CyberSourceTransactionError,
    CyberSourceTransportError,
)
from .models import (
    AuthorizationRequest,
    BillTo,
    CaptureRequest,
    Card,
    ChargeRequest,
    ChargeSubscriptionRequest,
    PurchaseTotals,
    SubscriptionInfoRequest,
    SubscriptionRequest,
)
from .security import (
    CertificateSigningDescriptor,
    UsernameTokenDescriptor,
    build_security_descriptor,
)
from importlib.metadata import version as _v, PackageNotFoundError
try:
    __version__ = _v("cybersource-soap")
except PackageNotFoundError:
    __version__ = "0.0.0+editable"

__all__ = [
    # client
    "CyberSourceClient",
    "CyberSourceConfig",
    "CertificateOptions",
    # credentials
    "EnvironmentView",
    "resolve_cert_options",
    "build_security_descriptor",
    "UsernameTokenDescriptor",
    "CertificateSigningDescriptor",
    # errors
    "CyberSourceError",
    "ConfigurationError",
    "CertificateParseError",
    "CyberSourceTransactionError",
    "CyberSourceTransportError",
    # models
    "BillTo",
    "Card",
    "PurchaseTotals",
    "AuthorizationRequest",
    "CaptureRequest",
    "ChargeRequest",
    "SubscriptionRequest",
    "SubscriptionInfoRequest",
    "ChargeSubscriptionRequest",
]
