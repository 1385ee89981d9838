"""Pydantic models: key_material, key_pair, tls_credential, issued_certificate."""

import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict
from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa


PublicKey = Union[rsa.RSAPublicKey, ec.EllipticCurvePublicKey]
PrivateKey = Union[rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey]


# -------------------- KEY MATERIAL -------------------- #

class KeyMaterial(BaseModel):
    """Where the signing key pair comes from: inline PEM wins over a file path."""
    pub_key: Optional[str] = None        # PEM public key
    priv_key: Optional[str] = None       # PEM private key
    pub_key_file: Optional[str] = None   # path to PEM public key
    priv_key_file: Optional[str] = None  # path to PEM private key


class KeyPair(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    public_key: PublicKey
    private_key: PrivateKey

    def private_key_pem(self) -> str:
        return self.private_key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        ).decode("ascii")


# -------------------- TLS CREDENTIAL -------------------- #

class TLSCredential(BaseModel):
    model_config = ConfigDict(frozen=True)

    cert: str   # PEM certificate
    key: str    # PEM private key (PKCS#8)


# -------------------- ISSUED CERTIFICATE -------------------- #

class IssuedCertificate(BaseModel):
    """A freshly signed certificate together with the pair that produced it."""
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    certificate: x509.Certificate
    serial_number: str      # decimal, YYYYMMDD00
    key_pair: KeyPair

    @property
    def not_after(self) -> datetime.datetime:
        return self.certificate.not_valid_after_utc

    def certificate_pem(self) -> str:
        return self.certificate.public_bytes(serialization.Encoding.PEM).decode("ascii")

    def to_credential(self) -> TLSCredential:
        return TLSCredential(cert=self.certificate_pem(), key=self.key_pair.private_key_pem())
