"""Security descriptors for CyberSource SOAP requests.

A descriptor is built fresh for every transaction: either a UsernameToken
(merchant ID + transaction key) or an X.509 signing configuration derived
from P12 or PEM material.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Tuple, Union

from .config import CertificateOptions, CyberSourceConfig
from .credentials import EnvironmentView, resolve_cert_options
from .errors import CertificateParseError, ConfigurationError
from .utils_crypto import (
    CERTIFICATE_PEM_TYPES,
    PRIVATE_KEY_PEM_TYPES,
    as_bytes,
    decode_base64,
    extract_from_p12,
    extract_pem_block,
    read_file_bytes,
)

logger = logging.getLogger(__name__)

# Values expected by the CyberSource SOAP binding; the gateway validates these URIs.
SIGNATURE_ALGORITHM = "http://www.w3.org/2000/09/xmldsig#rsa-sha1"
DIGEST_ALGORITHM = "http://www.w3.org/2000/09/xmldsig#sha1"
CANONICALIZATION_ALGORITHM = "http://www.w3.org/2001/10/xml-exc-c14n#"
ID_MODE = "wssecurity"
INCLUSIVE_NAMESPACE_PREFIXES = ("soap", "soapenv", "urn")


@dataclass(frozen=True)
class ResolvedKeyMaterial:
    private_key: bytes
    public_cert: bytes
    passphrase: str = ""


@dataclass(frozen=True)
class UsernameTokenDescriptor:
    merchant_id: str
    password: str
    options: Mapping[str, Any] = field(default_factory=dict)

    kind = "UsernameToken"


@dataclass(frozen=True)
class CertificateSigningDescriptor:
    private_key_pem: bytes = field(repr=False)
    cert_pem: bytes
    passphrase: str = field(default="", repr=False)
    signature_algorithm: str = SIGNATURE_ALGORITHM
    digest_algorithm: str = DIGEST_ALGORITHM
    canonicalization_algorithm: str = CANONICALIZATION_ALGORITHM
    id_mode: str = ID_MODE
    inclusive_namespace_prefixes: Tuple[str, ...] = INCLUSIVE_NAMESPACE_PREFIXES

    kind = "CertificateSigning"


SecurityDescriptor = Union[UsernameTokenDescriptor, CertificateSigningDescriptor]


def _decode_pem_base64(value: str) -> bytes:
    try:
        return decode_base64(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid base64 PEM value: {exc}") from exc


# Ordered (field, loader) providers per material; the first field that is set wins.
MaterialSource = Tuple[str, Callable[[Any], bytes]]

PRIVATE_KEY_SOURCES: Tuple[MaterialSource, ...] = (
    ("private_key_pem_base64", _decode_pem_base64),
    ("private_key_pem", as_bytes),
    ("private_key_path", read_file_bytes),
)
PUBLIC_CERT_SOURCES: Tuple[MaterialSource, ...] = (
    ("public_cert_pem_base64", _decode_pem_base64),
    ("public_cert_pem", as_bytes),
    ("public_cert_path", read_file_bytes),
)


def load_material(options: CertificateOptions, sources: Tuple[MaterialSource, ...]) -> Optional[bytes]:
    for field_name, loader in sources:
        value = getattr(options, field_name)
        if value:
            logger.debug("Loading certificate material from %s", field_name)
            return loader(value)
    return None


def _load_p12(options: CertificateOptions) -> Tuple[bytes, bytes]:
    # File errors surface as OSError; only decoding/parsing becomes CertificateParseError.
    if options.p12_base64:
        try:
            p12_bytes = decode_base64(options.p12_base64)
        except ValueError as exc:
            raise CertificateParseError(f"Failed to process P12 certificate: invalid base64 ({exc})") from exc
    else:
        p12_bytes = read_file_bytes(options.p12_path)
    material = extract_from_p12(p12_bytes, options.p12_passphrase or "")
    return material.private_key_pem, material.cert_pem


def resolve_key_material(options: CertificateOptions) -> ResolvedKeyMaterial:
    """Materialize and sanitize the key pair selected by ``options``.

    A configured P12 is authoritative: when it cannot be read the PEM fields
    are not consulted.
    """
    if options.has_p12:
        private_key, public_cert = _load_p12(options)
    else:
        private_key = load_material(options, PRIVATE_KEY_SOURCES)
        public_cert = load_material(options, PUBLIC_CERT_SOURCES)

    key_block = extract_pem_block(private_key, PRIVATE_KEY_PEM_TYPES) or private_key
    cert_block = extract_pem_block(public_cert, CERTIFICATE_PEM_TYPES) or public_cert
    if not key_block or not cert_block:
        raise ConfigurationError("Invalid CyberSource certificate configuration: could not parse key/cert PEMs")
    return ResolvedKeyMaterial(
        private_key=key_block,
        public_cert=cert_block,
        passphrase=options.passphrase or "",
    )


def build_security_descriptor(
    merchant_id: str,
    password: str,
    options: Optional[CertificateOptions],
    *,
    username_options: Optional[Mapping[str, Any]] = None,
) -> SecurityDescriptor:
    if options is None or options.is_empty():
        logger.debug("Using UsernameToken security for merchant %s", merchant_id)
        return UsernameTokenDescriptor(
            merchant_id=merchant_id,
            password=password,
            options=dict(username_options if username_options is not None else {"has_nonce": True}),
        )

    material = resolve_key_material(options)
    logger.debug("Using X.509 signing security for merchant %s", merchant_id)
    return CertificateSigningDescriptor(
        private_key_pem=material.private_key,
        cert_pem=material.public_cert,
        passphrase=material.passphrase,
    )


def security_descriptor(cfg: CyberSourceConfig, environ: Optional[Mapping[str, str]] = None) -> SecurityDescriptor:
    """Resolve credentials for ``cfg`` and build the descriptor for one request."""
    env = EnvironmentView(cfg.env_prefix, environ)
    options = resolve_cert_options(cfg.cert_options, env)
    return build_security_descriptor(
        cfg.merchant_id,
        cfg.password,
        options,
        username_options={"has_nonce": cfg.has_nonce},
    )
