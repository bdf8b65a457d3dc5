from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Union

from .errors import ConfigurationError

PRODUCTION = "production"
DEVELOPMENT = "development"

_WSDL_HOSTS = {
    PRODUCTION: "https://ics2wsa.ic3.com",
    DEVELOPMENT: "https://ics2wstesta.ic3.com",
}


@dataclass(frozen=True)
class CertificateOptions:
    """Certificate material for X.509 signed requests.

    Each material can be given as a file path, a base64 string or raw PEM.
    A P12 container (path or base64) replaces the separate key and cert.
    """

    p12_path: Optional[Union[str, Path]] = None
    p12_base64: Optional[str] = None
    p12_passphrase: Optional[str] = None
    private_key_path: Optional[Union[str, Path]] = None
    private_key_pem_base64: Optional[str] = None
    private_key_pem: Optional[Union[bytes, str]] = None
    public_cert_path: Optional[Union[str, Path]] = None
    public_cert_pem_base64: Optional[str] = None
    public_cert_pem: Optional[Union[bytes, str]] = None
    passphrase: Optional[str] = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    @property
    def has_p12(self) -> bool:
        return bool(self.p12_base64 or self.p12_path)


@dataclass
class CyberSourceConfig:
    """Merchant credentials and endpoint selection for the SOAP API.

    Args:
        password: Transaction key (may be empty when certificates are used).
        merchant_id: CyberSource merchant ID.
        environment: ``"production"`` or ``"development"`` (test gateway).
        language: Language of reason code messages (``"en"`` or ``"es"``).
        version: Transaction API version, selects the WSDL and namespace.
        currency: Default currency for amount-bearing requests.
        cert_options: Explicit certificate material. When ``None`` the
            ``{PROD,DEV}_CYBERSOURCE_*`` environment variables are consulted.
    """

    password: str
    merchant_id: str
    environment: str = DEVELOPMENT
    language: str = "en"
    version: str = "1.151"
    currency: str = "USD"
    cert_options: Optional[CertificateOptions] = None
    timeout: int = 30
    verify_ssl: bool = True
    # Optional local WSDL override (e.g. file:///.../CyberSourceTransaction_1.151.wsdl)
    local_wsdl_url: Optional[str] = None
    # Adds a wsse:Nonce to the UsernameToken header
    has_nonce: bool = True

    @property
    def wsdl_url(self) -> str:
        host = _WSDL_HOSTS.get(self.environment)
        if host is None:
            raise ConfigurationError(f"Unknown CyberSource environment: {self.environment!r}")
        return f"{host}/commerce/1.x/transactionProcessor/CyberSourceTransaction_{self.version}.wsdl"

    @property
    def env_prefix(self) -> str:
        return "PROD" if self.environment == PRODUCTION else "DEV"

    @property
    def xmlns(self) -> str:
        return f"urn:schemas-cybersource-com:transaction-data-{self.version}"
