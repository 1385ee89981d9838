"""
SHA-256 signing and verification for RSA (PKCS#1 v1.5) and EC (ECDSA) keys.
"""
from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

from dyncert.common.errors import SigningError
from dyncert.common.protocol import KeyPair

SIGNATURE_HASH = hashes.SHA256()


def check_compatible(key_pair: KeyPair):
    """Raise SigningError if public and private key belong to different algorithms."""
    pub, priv = key_pair.public_key, key_pair.private_key
    if isinstance(priv, rsa.RSAPrivateKey):
        if not isinstance(pub, rsa.RSAPublicKey):
            raise SigningError(f"RSA private key cannot sign for {type(pub).__name__}")
    elif isinstance(priv, ec.EllipticCurvePrivateKey):
        if not isinstance(pub, ec.EllipticCurvePublicKey):
            raise SigningError(f"EC private key cannot sign for {type(pub).__name__}")
        if pub.curve.name != priv.curve.name:
            raise SigningError(f"Curve mismatch: public {pub.curve.name}, private {priv.curve.name}")
    else:
        raise SigningError(f"Unsupported private key type: {type(priv).__name__}")


def sign_builder(builder, private_key):
    """Self-sign a CertificateBuilder with SHA-256."""
    try:
        return builder.sign(private_key=private_key, algorithm=SIGNATURE_HASH)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise SigningError(f"Certificate signing failed ({e})") from e


def verify_signature(public_key, signature: bytes, data: bytes, hash_algorithm=None) -> bool:
    """Verify a signature over data with the padding/scheme matching the key type."""
    if hash_algorithm is None:
        hash_algorithm = SIGNATURE_HASH
    try:
        if isinstance(public_key, rsa.RSAPublicKey):
            public_key.verify(signature, data, padding.PKCS1v15(), hash_algorithm)
        elif isinstance(public_key, ec.EllipticCurvePublicKey):
            public_key.verify(signature, data, ec.ECDSA(hash_algorithm))
        else:
            return False
        return True
    except InvalidSignature:
        return False
