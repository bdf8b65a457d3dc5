import logging
import secrets
import uuid
from typing import Iterable, Optional

import xmlsec
from lxml import etree
from lxml.etree import QName
from zeep import ns
from zeep.utils import detect_soap_env
from zeep.wsse.signature import MemorySignature
from zeep.wsse.username import UsernameToken
from zeep.wsse.utils import ensure_id, get_security_header

from ..errors import ConfigurationError
from ..security import (
    ID_MODE,
    INCLUSIVE_NAMESPACE_PREFIXES,
    CertificateSigningDescriptor,
    SecurityDescriptor,
    UsernameTokenDescriptor,
)
from ..utils_crypto import cert_der_b64

logger = logging.getLogger(__name__)

EXC_C14N_NS = "http://www.w3.org/2001/10/xml-exc-c14n#"
X509V3_VALUE_TYPE = "http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-x509-token-profile-1.0#X509v3"
BASE64_ENCODING_TYPE = "http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-soap-message-security-1.0#Base64Binary"

_SIGNATURE_TRANSFORMS = {
    "http://www.w3.org/2000/09/xmldsig#rsa-sha1": xmlsec.Transform.RSA_SHA1,
    "http://www.w3.org/2001/04/xmldsig-more#rsa-sha256": xmlsec.Transform.RSA_SHA256,
}
_DIGEST_TRANSFORMS = {
    "http://www.w3.org/2000/09/xmldsig#sha1": xmlsec.Transform.SHA1,
    "http://www.w3.org/2001/04/xmlenc#sha256": xmlsec.Transform.SHA256,
}


def _add_inclusive(node, prefixes):
    if not prefixes:
        return
    inc = etree.SubElement(node, QName(EXC_C14N_NS, "InclusiveNamespaces"))
    inc.set("PrefixList", " ".join(prefixes))


class CyberSourceSignature(MemorySignature):
    """WSSE X.509 signature over the SOAP Body, shaped for the CyberSource binding.

    Adds a BinarySecurityToken referenced from KeyInfo, puts ``wsu:Id`` on the
    Body and lists the inclusive namespace prefixes on every exclusive C14N
    step. Replies are not verified.
    """

    def __init__(
        self,
        key_data: bytes,
        cert_data: bytes,
        password: Optional[str] = None,
        *,
        signature_method=None,
        digest_method=None,
        inclusive_prefixes: Iterable[str] = INCLUSIVE_NAMESPACE_PREFIXES,
    ):
        super().__init__(
            key_data,
            cert_data,
            password,
            signature_method=signature_method or xmlsec.Transform.RSA_SHA1,
            digest_method=digest_method or xmlsec.Transform.SHA1,
        )
        self.inclusive_prefixes = list(inclusive_prefixes)
        self._cert_b64 = cert_der_b64(cert_data)

    def verify(self, envelope):
        return envelope

    def apply(self, envelope, headers):
        soap_env = detect_soap_env(envelope)
        security = get_security_header(envelope)
        security.set(QName(soap_env, "mustUnderstand"), "1")
        for existing in list(security.findall(QName(ns.DS, "Signature"))):
            security.remove(existing)

        body = envelope.find(QName(soap_env, "Body"))
        if body is None:
            raise ConfigurationError("SOAP envelope has no Body to sign")

        bst_id = f"X509-{uuid.uuid4().hex}"
        bst = etree.SubElement(
            security,
            QName(ns.WSSE, "BinarySecurityToken"),
            {
                QName(ns.WSU, "Id"): bst_id,
                "ValueType": X509V3_VALUE_TYPE,
                "EncodingType": BASE64_ENCODING_TYPE,
            },
        )
        bst.text = self._cert_b64

        signature = xmlsec.template.create(
            envelope,
            xmlsec.Transform.EXCL_C14N,
            self.signature_method,
            ns="ds",
        )
        _add_inclusive(
            signature.find(QName(ns.DS, "SignedInfo")).find(QName(ns.DS, "CanonicalizationMethod")),
            self.inclusive_prefixes,
        )
        key_info = xmlsec.template.ensure_key_info(signature)
        str_el = etree.SubElement(key_info, QName(ns.WSSE, "SecurityTokenReference"))
        etree.SubElement(
            str_el,
            QName(ns.WSSE, "Reference"),
            {"URI": f"#{bst_id}", "ValueType": X509V3_VALUE_TYPE},
        )
        security.append(signature)

        ctx = xmlsec.SignatureContext()
        try:
            key = xmlsec.Key.from_memory(self.key_data, xmlsec.KeyFormat.PEM, self.password or None)
            key.load_cert_from_memory(self.cert_data, xmlsec.KeyFormat.PEM)
        except xmlsec.Error as exc:
            raise ConfigurationError(f"Could not load signing key/certificate: {exc}") from exc
        ctx.key = key

        body_id = ensure_id(body)
        ctx.register_id(body, "Id", ns.WSU)
        ref = xmlsec.template.add_reference(signature, self.digest_method, uri=f"#{body_id}")
        transform = xmlsec.template.add_transform(ref, xmlsec.Transform.EXCL_C14N)
        _add_inclusive(transform, self.inclusive_prefixes)

        try:
            ctx.sign(signature)
        except xmlsec.Error as exc:
            raise ConfigurationError(f"Request signing failed: {exc}") from exc
        logger.debug("Signed SOAP Body %s", body_id)
        return envelope, headers


def build_wsse(descriptor: SecurityDescriptor):
    """Turn a security descriptor into the zeep ``wsse`` object for one request."""
    if isinstance(descriptor, UsernameTokenDescriptor):
        nonce = secrets.token_hex(16) if descriptor.options.get("has_nonce") else None
        return UsernameToken(descriptor.merchant_id, descriptor.password, nonce=nonce)
    if isinstance(descriptor, CertificateSigningDescriptor):
        try:
            signature_method = _SIGNATURE_TRANSFORMS[descriptor.signature_algorithm]
            digest_method = _DIGEST_TRANSFORMS[descriptor.digest_algorithm]
        except KeyError as exc:
            raise ConfigurationError(f"Unsupported signing algorithm: {exc.args[0]}") from exc
        if descriptor.canonicalization_algorithm != EXC_C14N_NS:
            raise ConfigurationError(
                f"Unsupported canonicalization algorithm: {descriptor.canonicalization_algorithm}"
            )
        # Only wsu:Id referencing is supported by the binding
        if descriptor.id_mode != ID_MODE:
            raise ConfigurationError(f"Unsupported id mode: {descriptor.id_mode}")
        return CyberSourceSignature(
            descriptor.private_key_pem,
            descriptor.cert_pem,
            descriptor.passphrase,
            signature_method=signature_method,
            digest_method=digest_method,
            inclusive_prefixes=descriptor.inclusive_namespace_prefixes,
        )
    raise ConfigurationError(f"Unknown security descriptor: {descriptor!r}")
