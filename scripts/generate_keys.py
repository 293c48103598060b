"""
Write a local RSA key pair for signing access tokens.

Usage: python scripts/generate_keys.py [out_dir]   (default: certs/local)
"""

from __future__ import annotations

import sys
from pathlib import Path

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa


def main() -> None:
    out_dir = Path(sys.argv[1] if len(sys.argv) > 1 else "certs/local")
    out_dir.mkdir(parents=True, exist_ok=True)

    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )

    (out_dir / "private.pem").write_bytes(private_pem)
    (out_dir / "public.pem").write_bytes(public_pem)
    print(f"wrote {out_dir / 'private.pem'} and {out_dir / 'public.pem'}")


if __name__ == "__main__":
    main()
