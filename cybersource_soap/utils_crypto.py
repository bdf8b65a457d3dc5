import base64
from pathlib import Path
from typing import NamedTuple, Optional, Sequence, Union

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.serialization import pkcs12

from .errors import CertificateParseError, ConfigurationError

PRIVATE_KEY_PEM_TYPES = (
    "ENCRYPTED PRIVATE KEY",
    "PRIVATE KEY",
    "RSA PRIVATE KEY",
    "EC PRIVATE KEY",
)
CERTIFICATE_PEM_TYPES = ("CERTIFICATE",)


class P12Material(NamedTuple):
    private_key_pem: bytes
    cert_pem: bytes


def as_bytes(value: Union[bytes, str]) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def read_file_bytes(path: Union[str, Path]) -> bytes:
    return Path(path).read_bytes()


def decode_base64(value: Union[bytes, str]) -> bytes:
    """Decode base64 text, ignoring embedded whitespace and line breaks."""
    compact = b"".join(as_bytes(value).split())
    return base64.b64decode(compact, validate=True)


def extract_pem_block(data: Optional[Union[bytes, str]], accepted_types: Sequence[str]) -> Optional[bytes]:
    """Return the first ``-----BEGIN <type>-----`` .. ``-----END <type>-----`` block.

    Types are tried in the given order. Text around the block (for example the
    ``Bag Attributes`` preamble written by ``openssl pkcs12``) is dropped.
    Returns ``None`` when ``data`` is empty or no accepted block is present.
    """
    if not data:
        return None
    text = as_bytes(data).decode("utf-8", errors="replace").replace("\r\n", "\n")
    for pem_type in accepted_types:
        begin_marker = f"-----BEGIN {pem_type}-----"
        end_marker = f"-----END {pem_type}-----"
        begin = text.find(begin_marker)
        if begin == -1:
            continue
        end = text.find(end_marker, begin)
        if end == -1:
            continue
        return text[begin:end + len(end_marker)].encode("utf-8")
    return None


def extract_from_p12(p12_bytes: bytes, passphrase: Optional[str] = None) -> P12Material:
    """Pull the private key and leaf certificate out of a PKCS#12 container.

    The first key and the first certificate are used; a container holding
    several keys or a chain is not disambiguated beyond that.
    """
    password = passphrase.encode("utf-8") if passphrase else None
    try:
        container = pkcs12.load_pkcs12(p12_bytes, password)
    except (ValueError, TypeError) as exc:
        raise CertificateParseError(f"Failed to extract certificate from P12: {exc}") from exc

    if container.key is None:
        raise CertificateParseError("Failed to extract certificate from P12: no private key found")
    certificate = None
    if container.cert is not None:
        certificate = container.cert.certificate
    elif container.additional_certs:
        certificate = container.additional_certs[0].certificate
    if certificate is None:
        raise CertificateParseError("Failed to extract certificate from P12: no certificate found")

    key_pem = container.key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    cert_pem = certificate.public_bytes(serialization.Encoding.PEM)
    return P12Material(private_key_pem=key_pem, cert_pem=cert_pem)


def cert_der_b64(cert_pem: bytes) -> str:
    """Base64 DER of the first certificate in ``cert_pem`` (BinarySecurityToken value)."""
    try:
        cert = x509.load_pem_x509_certificate(as_bytes(cert_pem))
    except ValueError as exc:
        raise ConfigurationError(f"Invalid PEM certificate: {exc}") from exc
    der = cert.public_bytes(serialization.Encoding.DER)
    return base64.b64encode(der).decode("ascii")
