"""Selection of the active certificate option set.

Explicit options always win. Without them the tier-prefixed
``{PROD,DEV}_CYBERSOURCE_*`` environment variables are read as one option set.
The two sources are never mixed.
"""
import logging
import os
from typing import Mapping, Optional

from .config import PRODUCTION, CertificateOptions

logger = logging.getLogger(__name__)

# CertificateOptions field -> environment variable suffix
ENV_VARIABLES = {
    "p12_path": "CYBERSOURCE_P12_PATH",
    "p12_base64": "CYBERSOURCE_P12_BASE64",
    "p12_passphrase": "CYBERSOURCE_P12_PASSPHRASE",
    "private_key_path": "CYBERSOURCE_PRIVATE_KEY_PATH",
    "private_key_pem_base64": "CYBERSOURCE_PRIVATE_KEY_PEM_BASE64",
    "private_key_pem": "CYBERSOURCE_PRIVATE_KEY_PEM",
    "public_cert_path": "CYBERSOURCE_PUBLIC_CERT_PATH",
    "public_cert_pem_base64": "CYBERSOURCE_PUBLIC_CERT_PEM_BASE64",
    "public_cert_pem": "CYBERSOURCE_PUBLIC_CERT_PEM",
    "passphrase": "CYBERSOURCE_CERT_PASSPHRASE",
}


class EnvironmentView:
    """Read-only, prefix-scoped view over environment variables."""

    def __init__(self, prefix: str, environ: Optional[Mapping[str, str]] = None):
        self.prefix = prefix
        self._environ = os.environ if environ is None else environ

    @classmethod
    def for_environment(cls, environment: str, environ: Optional[Mapping[str, str]] = None) -> "EnvironmentView":
        prefix = "PROD" if environment == PRODUCTION else "DEV"
        return cls(prefix, environ)

    def key(self, name: str) -> str:
        return f"{self.prefix}_{name}"

    def get(self, name: str) -> Optional[str]:
        return self._environ.get(self.key(name))


def options_from_environment(env: EnvironmentView) -> Optional[CertificateOptions]:
    """Build options from the environment, or ``None`` when no variable is set.

    An empty string counts as set. A partial set is returned as-is; the
    security builder reports the missing half.
    """
    values = {field: env.get(name) for field, name in ENV_VARIABLES.items()}
    if all(value is None for value in values.values()):
        return None
    present = sorted(env.key(ENV_VARIABLES[f]) for f, v in values.items() if v is not None)
    logger.debug("Using certificate settings from environment: %s", ", ".join(present))
    return CertificateOptions(**values)


def resolve_cert_options(
    explicit: Optional[CertificateOptions],
    env: EnvironmentView,
) -> Optional[CertificateOptions]:
    if explicit is not None and not explicit.is_empty():
        logger.debug("Using explicit certificate options")
        return explicit
    return options_from_environment(env)
