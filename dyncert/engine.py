"""
Dynamic certificates: issue a self-signed certificate for whatever hostname
a TLS client asks for, signed by one long-lived key pair.

    certs = DynamicCertificates(pub_key_file="pub.pem", priv_key_file="priv.pem")
    context.sni_callback = certs.ssl_sni_callback
"""
import logging
from typing import Optional

from dyncert.common.errors import DynCertError
from dyncert.common.protocol import IssuedCertificate, KeyMaterial, KeyPair, TLSCredential
from dyncert.crypto import pki, serial
from dyncert.crypto.fingerprint import spki_fingerprint
from dyncert.crypto.keys import KeyPairStore, load_key_pair, resolve_key_material
from dyncert.storage.cache import CertificateCache
from dyncert.tls import alert_for, create_secure_context

logger = logging.getLogger(__name__)


class DynamicCertificates:
    """
    Certificate issuing engine.

    Key material comes either inline (pub_key / priv_key) or from files
    (pub_key_file / priv_key_file); inline wins. With cache=True issued
    certificates are reused per hostname until they expire, otherwise every
    handshake signs a new one.
    alpn_protocols is applied to every context swapped in during a handshake.
    """

    def __init__(self, pub_key: Optional[str] = None, priv_key: Optional[str] = None,
                 pub_key_file: Optional[str] = None, priv_key_file: Optional[str] = None,
                 cache: bool = False, cache_size: int = 1024, alpn_protocols=None):
        material = KeyMaterial(pub_key=pub_key, priv_key=priv_key,
                               pub_key_file=pub_key_file, priv_key_file=priv_key_file)
        public_pem, private_pem = resolve_key_material(material)
        self._store = KeyPairStore.from_pem(public_pem, private_pem)
        self.cache = CertificateCache(cache_size) if cache else None
        self.alpn_protocols = list(alpn_protocols) if alpn_protocols else None

    @classmethod
    def from_material(cls, material: KeyMaterial, **kwargs) -> "DynamicCertificates":
        return cls(pub_key=material.pub_key, priv_key=material.priv_key,
                   pub_key_file=material.pub_key_file, priv_key_file=material.priv_key_file,
                   **kwargs)

    @property
    def key_pair(self) -> KeyPair:
        return self._store.key_pair

    def import_key_pair(self, public_pem, private_pem) -> KeyPair:
        """Replace the signing pair; already issued certificates are unaffected."""
        key_pair = load_key_pair(public_pem, private_pem)
        self._store.replace(key_pair)
        if self.cache is not None:
            self.cache.clear()
        return key_pair

    # -------------------- ISSUANCE -------------------- #

    def create_certificate(self, server_name: str) -> IssuedCertificate:
        generation, key_pair = self._store.snapshot()
        if self.cache is not None:
            issued = self.cache.get(server_name, generation)
            if issued is not None:
                return issued
        issued = pki.issue(server_name, key_pair)
        if self.cache is not None:
            self.cache.put(server_name, generation, issued)
        return issued

    def create_credential(self, server_name: str) -> TLSCredential:
        return self.create_certificate(server_name).to_credential()

    @staticmethod
    def create_serial() -> str:
        return serial.current()

    def get_spki_fingerprint(self) -> str:
        """SHA-256 of the SPKI, for a TLSA 3 1 1 record."""
        return spki_fingerprint(self._store.key_pair)

    # -------------------- HANDSHAKE HOOKS -------------------- #

    def sni_callback(self, server_name: str, respond):
        """
        Callback-shaped hook: respond(error, credential) is called exactly once.
        Issuance errors go to respond instead of being raised.
        """
        try:
            credential = self.create_credential(server_name)
        except DynCertError as e:
            logger.warning("Certificate issuance failed for %r: %s", server_name, e)
            respond(e, None)
            return
        respond(None, credential)

    def ssl_sni_callback(self, ssl_socket, server_name, ssl_context):
        """
        Assign to ssl.SSLContext.sni_callback. Without SNI the listener's own
        context stays in place; otherwise the swapped context keeps the
        listener's version bounds and options plus alpn_protocols.
        """
        if server_name is None:
            return None
        try:
            ssl_socket.context = create_secure_context(
                self.create_credential(server_name), ssl_context, self.alpn_protocols)
        except DynCertError as e:
            logger.warning("Certificate issuance failed for %r: %s", server_name, e)
            return alert_for(e)
        return None
