"""Demo TLS server: answers every handshake with a certificate for the SNI name."""

import socket
import ssl

from dyncert.config import load_settings
from dyncert.engine import DynamicCertificates
from dyncert.tls import create_secure_context

BODY = b"dyncert: certificate issued for the requested name\n"


def build_context(certs: DynamicCertificates, default_hostname: str) -> ssl.SSLContext:
    """Listener context: default certificate for clients without SNI, dynamic otherwise."""
    context = create_secure_context(certs.create_credential(default_hostname),
                                    alpn_protocols=certs.alpn_protocols)
    context.sni_callback = certs.ssl_sni_callback
    return context


def respond(tls_conn):
    tls_conn.recv(4096)
    tls_conn.sendall(
        b"HTTP/1.1 200 OK\r\n"
        b"Content-Type: text/plain\r\n"
        + f"Content-Length: {len(BODY)}\r\n".encode()
        + b"Connection: close\r\n\r\n"
        + BODY
    )


def serve_connection(conn, context: ssl.SSLContext, timeout: float) -> bool:
    """Handshake and answer one client; a stalled client is dropped after timeout seconds."""
    conn.settimeout(timeout)
    try:
        with context.wrap_socket(conn, server_side=True) as tls_conn:
            respond(tls_conn)
        return True
    except (ssl.SSLError, OSError) as e:
        print(f"❌ Handshake failed: {e}")
        conn.close()
        return False


def main():
    settings = load_settings()
    certs = DynamicCertificates.from_material(settings.key_material(), cache=settings.cache,
                                              alpn_protocols=["http/1.1"])
    context = build_context(certs, settings.default_hostname)
    print(f"SPKI fingerprint (TLSA 3 1 1): {certs.get_spki_fingerprint()}")

    srv = socket.socket()
    srv.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    srv.bind((settings.host, settings.port))
    srv.listen(5)
    print(f"Server ready on {settings.host}:{settings.port}.")

    while True:
        conn, addr = srv.accept()
        print("Client:", addr)
        if serve_connection(conn, context, settings.handshake_timeout):
            print("✓ Served", addr)


if __name__ == "__main__":
    main()
