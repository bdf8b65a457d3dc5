"""Split a CyberSource P12 into private-key.pem / certificate.pem (and base64 copies).

Usage: python examples/convert_p12.py certificate.p12 [passphrase] [out_dir]
"""
import base64
import logging
import sys
from pathlib import Path

from cybersource_soap.errors import CertificateParseError
from cybersource_soap.utils_crypto import extract_from_p12

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("convert_p12")

def main(argv):
    if len(argv) < 2:
        print(__doc__)
        return 2
    p12_path = Path(argv[1])
    passphrase = argv[2] if len(argv) > 2 else ""
    out_dir = Path(argv[3]) if len(argv) > 3 else p12_path.parent

    try:
        material = extract_from_p12(p12_path.read_bytes(), passphrase)
    except CertificateParseError as e:
        logger.error(f"{e} (check the passphrase)")
        return 1

    out_dir.mkdir(parents=True, exist_ok=True)
    outputs = {
        "private-key.pem": material.private_key_pem,
        "certificate.pem": material.cert_pem,
    }
    for name, data in outputs.items():
        (out_dir / name).write_bytes(data)
        # Values for {DEV,PROD}_CYBERSOURCE_*_PEM_BASE64
        (out_dir / f"{name}.base64").write_text(base64.b64encode(data).decode("ascii"))
        logger.info(f"Wrote {out_dir / name}")
    return 0

if __name__ == "__main__":
    sys.exit(main(sys.argv))
