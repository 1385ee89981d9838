"""
Signing key pair: PEM parsing, key material loading and the shared store.
Provides load_key_pair(public_pem, private_pem) and KeyPairStore.
"""
import logging
import threading

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from dyncert.common.errors import KeyParseError, MissingKeyMaterialError
from dyncert.common.protocol import KeyMaterial, KeyPair

logger = logging.getLogger(__name__)

SUPPORTED_PUBLIC = (rsa.RSAPublicKey, ec.EllipticCurvePublicKey)
SUPPORTED_PRIVATE = (rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey)


def _as_bytes(pem):
    if isinstance(pem, str):
        pem = pem.encode("ascii")
    return pem


def load_public_key(pem):
    """Parse a PEM public key (SPKI or PKCS#1) from string or bytes."""
    try:
        key = serialization.load_pem_public_key(_as_bytes(pem))
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyParseError(f"Invalid public key PEM ({e})") from e
    if not isinstance(key, SUPPORTED_PUBLIC):
        raise KeyParseError(f"Unsupported public key type: {type(key).__name__}")
    return key


def load_private_key(pem):
    """Parse an unencrypted PEM private key (PKCS#8, PKCS#1 or SEC1)."""
    try:
        key = serialization.load_pem_private_key(_as_bytes(pem), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyParseError(f"Invalid private key PEM ({e})") from e
    if not isinstance(key, SUPPORTED_PRIVATE):
        raise KeyParseError(f"Unsupported private key type: {type(key).__name__}")
    return key


def load_key_pair(public_pem, private_pem) -> KeyPair:
    """Parse both PEM blocks into a KeyPair. Correspondence is not checked."""
    return KeyPair(
        public_key=load_public_key(public_pem),
        private_key=load_private_key(private_pem),
    )


# -------------------- KEY MATERIAL LOADER -------------------- #

def _read_ascii(path: str, what: str) -> str:
    try:
        with open(path, "r", encoding="ascii") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise MissingKeyMaterialError(f"Cannot read {what} key file {path} ({e})") from e


def resolve_key_material(material: KeyMaterial):
    """
    Return (public_pem, private_pem).
    For each key the inline PEM is used when non-empty, otherwise the file is read.
    """
    public_pem = material.pub_key
    private_pem = material.priv_key

    if not public_pem and material.pub_key_file:
        public_pem = _read_ascii(material.pub_key_file, "public")
    if not private_pem and material.priv_key_file:
        private_pem = _read_ascii(material.priv_key_file, "private")

    if not public_pem:
        raise MissingKeyMaterialError("No public key supplied (pub_key or pub_key_file)")
    if not private_pem:
        raise MissingKeyMaterialError("No private key supplied (priv_key or priv_key_file)")
    return public_pem, private_pem


# -------------------- SHARED STORE -------------------- #

class KeyPairStore:
    """
    Process-wide holder of the signing KeyPair.

    Readers take the current reference with no locking; KeyPair is immutable,
    so an issuance that grabbed a pair keeps a consistent snapshot even if
    replace() runs concurrently. Writers are serialized.
    """

    def __init__(self, key_pair: KeyPair):
        # (generation, key_pair) swapped as a single reference
        self._current = (0, key_pair)
        self._write_lock = threading.Lock()

    @classmethod
    def from_pem(cls, public_pem, private_pem) -> "KeyPairStore":
        return cls(load_key_pair(public_pem, private_pem))

    @property
    def key_pair(self) -> KeyPair:
        return self._current[1]

    @property
    def generation(self) -> int:
        """Incremented on every replace(); lets caches detect re-keying."""
        return self._current[0]

    def snapshot(self):
        """Return (generation, key_pair) as one consistent pair."""
        return self._current

    def replace(self, key_pair: KeyPair) -> KeyPair:
        with self._write_lock:
            generation = self._current[0] + 1
            self._current = (generation, key_pair)
        logger.info("Signing key pair replaced (generation %d)", generation)
        return key_pair
