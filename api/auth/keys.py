"""
RSA key material for signing and verifying access tokens.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from core.errors import KeyLoadError


@dataclass(frozen=True)
class KeyPair:
    private_key: rsa.RSAPrivateKey
    public_key: rsa.RSAPublicKey


def _read_pem(path: str | Path, what: str) -> bytes:
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise KeyLoadError(f"could not read {what} key file {path}: {exc}") from exc
    if not data.strip():
        raise KeyLoadError(f"{what} key file {path} is empty")
    return data


def load_private_key(path: str | Path) -> rsa.RSAPrivateKey:
    data = _read_pem(path, "private")
    try:
        key = serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError) as exc:
        raise KeyLoadError(f"could not parse private key {path}: {exc}") from exc
    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyLoadError(f"private key {path} is not an RSA key")
    return key


def load_public_key(path: str | Path) -> rsa.RSAPublicKey:
    data = _read_pem(path, "public")
    try:
        key = serialization.load_pem_public_key(data)
    except (ValueError, TypeError) as exc:
        raise KeyLoadError(f"could not parse public key {path}: {exc}") from exc
    if not isinstance(key, rsa.RSAPublicKey):
        raise KeyLoadError(f"public key {path} is not an RSA key")
    return key


def load_key_pair(private_key_path: str | Path, public_key_path: str | Path) -> KeyPair:
    """
    Load both PEM files (PKCS1 or PKCS8) and check that they belong together.

    Any failure is fatal to startup: the service cannot issue or verify
    tokens without both halves.
    """
    private_key = load_private_key(private_key_path)
    public_key = load_public_key(public_key_path)

    if private_key.public_key().public_numbers() != public_key.public_numbers():
        raise KeyLoadError(
            f"public key {public_key_path} does not match private key {private_key_path}"
        )
    return KeyPair(private_key=private_key, public_key=public_key)
