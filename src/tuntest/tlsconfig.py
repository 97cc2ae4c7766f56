"""TLS contexts shared by client and server test harnesses.

These contexts skip certificate verification and must never be used outside
of tests.
"""

from __future__ import annotations

import ssl
from dataclasses import dataclass
from typing import Optional


CIPHER_SUITE = "ECDHE-RSA-AES128-GCM-SHA256"
ALPN_PROTOCOL = "h2"


@dataclass(frozen=True, slots=True)
class CertKeyPair:
    """PEM certificate and private key files."""
    certfile: str
    keyfile: str
    password: Optional[str] = None


def tls_context(pair: CertKeyPair, *, server_side: bool) -> ssl.SSLContext:
    """
    Build an HTTP/2-ready TLS context for one side of a test connection.

    Both sides present ``pair``, pin TLS 1.2 with a single cipher suite,
    disable session tickets, prefer the server's cipher order and advertise
    only ``h2`` over ALPN. The client does not verify the server.

    The server requests a client certificate and verifies it against
    ``pair`` alone: a client presenting any other certificate fails the
    handshake. Clients that send no certificate are accepted. Share one
    pair between both sides of a harness.
    """
    if server_side:
        ctx = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
        ctx.verify_mode = ssl.CERT_OPTIONAL
        ctx.load_verify_locations(cafile=pair.certfile)
    else:
        ctx = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE

    ctx.load_cert_chain(pair.certfile, pair.keyfile, password=pair.password)
    ctx.minimum_version = ssl.TLSVersion.TLSv1_2
    # TLS 1.3 suites cannot be restricted, so cap the version too
    ctx.maximum_version = ssl.TLSVersion.TLSv1_2
    ctx.set_ciphers(CIPHER_SUITE)
    ctx.options |= ssl.OP_NO_TICKET | ssl.OP_CIPHER_SERVER_PREFERENCE
    ctx.set_alpn_protocols([ALPN_PROTOCOL])
    return ctx


def server_tls_context(pair: CertKeyPair) -> ssl.SSLContext:
    return tls_context(pair, server_side=True)


def client_tls_context(pair: CertKeyPair) -> ssl.SSLContext:
    return tls_context(pair, server_side=False)
