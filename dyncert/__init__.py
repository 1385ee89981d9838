"""Ephemeral self-signed X.509 certificates issued per SNI hostname."""

from dyncert.common.errors import (
    DynCertError,
    InvalidHostnameError,
    KeyParseError,
    MissingKeyMaterialError,
    SigningError,
)
from dyncert.common.protocol import IssuedCertificate, KeyMaterial, KeyPair, TLSCredential
from dyncert.engine import DynamicCertificates

__version__ = "1.0.0"

__all__ = [
    "DynamicCertificates",
    "DynCertError",
    "InvalidHostnameError",
    "IssuedCertificate",
    "KeyMaterial",
    "KeyPair",
    "KeyParseError",
    "MissingKeyMaterialError",
    "SigningError",
    "TLSCredential",
]
