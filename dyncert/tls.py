"""
Python ssl glue: build a server SSLContext from a TLSCredential.
"""
import os
import ssl
import tempfile

from dyncert.common.errors import InvalidHostnameError
from dyncert.common.protocol import TLSCredential


def create_secure_context(credential: TLSCredential, listener: ssl.SSLContext = None,
                          alpn_protocols=None) -> ssl.SSLContext:
    """
    Return a server-side SSLContext presenting the credential.

    With a listener context, its protocol version bounds and options carry
    over. ssl has no getter for ALPN, so protocols must be passed explicitly.
    ssl only loads key material from paths, so the PEM pair goes through a
    private temporary file that is removed as soon as it is loaded.
    """
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    if listener is not None:
        context.minimum_version = listener.minimum_version
        context.maximum_version = listener.maximum_version
        context.options = listener.options
    if alpn_protocols:
        context.set_alpn_protocols(list(alpn_protocols))

    fd, path = tempfile.mkstemp(suffix=".pem")
    try:
        with os.fdopen(fd, "w", encoding="ascii") as f:
            f.write(credential.cert)
            f.write(credential.key)
        context.load_cert_chain(path)
    finally:
        os.unlink(path)
    return context


def alert_for(error: Exception) -> int:
    """TLS alert returned from an sni_callback when issuance fails."""
    if isinstance(error, InvalidHostnameError):
        return ssl.ALERT_DESCRIPTION_UNRECOGNIZED_NAME
    return ssl.ALERT_DESCRIPTION_INTERNAL_ERROR
