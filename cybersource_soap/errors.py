from typing import Any, Mapping, Optional

class CyberSourceError(RuntimeError):
    """Base class for any CyberSource error or transport problem."""

    def __init__(self, msg: str, *, response: Optional[Mapping | Any] = None):
        super().__init__(msg)
        self.response = response


class ConfigurationError(CyberSourceError):
    """Credential material is missing, incomplete or inconsistent."""
    pass


class CertificateParseError(ConfigurationError):
    """A PKCS#12 container could not be decoded, decrypted or scanned."""
    pass


class CyberSourceTransactionError(CyberSourceError):
    """The gateway answered with a reason code other than 100."""

    def __init__(self, msg: str, *, code: Optional[int] = None, response: Optional[Mapping | Any] = None):
        super().__init__(msg, response=response)
        self.code = code


class CyberSourceTransportError(CyberSourceTransactionError):
    """Network, timeout, WSDL or SOAP fault errors (reported as code 500)."""
    pass
