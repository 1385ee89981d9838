"""SPKI SHA-256 fingerprints for DANE/TLSA (usage 3, selector 1, matching type 1)."""
from cryptography.hazmat.primitives import serialization

from dyncert.common.protocol import KeyPair
from dyncert.common.utils import sha256_hex


def spki_der(public_key) -> bytes:
    return public_key.public_bytes(
        serialization.Encoding.DER,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def spki_fingerprint(key_pair: KeyPair) -> str:
    """Return lowercase hex SHA-256 over the DER SubjectPublicKeyInfo (64 chars)."""
    return sha256_hex(spki_der(key_pair.public_key))


def tlsa_record(hostname: str, fingerprint: str, port: int = 443, protocol: str = "tcp") -> str:
    """Format a `3 1 1` TLSA resource record line for hostname."""
    owner = hostname if hostname.endswith(".") else hostname + "."
    return f"_{port}._{protocol}.{owner} IN TLSA 3 1 1 {fingerprint}"
