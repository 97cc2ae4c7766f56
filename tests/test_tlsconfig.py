"""Tests for the test-harness TLS contexts."""

import os
import ssl

import pytest

from tuntest import CertKeyPair, client_tls_context, server_tls_context, tls_context
from tuntest.tlsconfig import ALPN_PROTOCOL, CIPHER_SUITE


FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")


@pytest.fixture
def pair():
    return CertKeyPair(
        certfile=os.path.join(FIXTURES, "cert.pem"),
        keyfile=os.path.join(FIXTURES, "key.pem"),
    )


def tls12_ciphers(ctx):
    return [c["name"] for c in ctx.get_ciphers() if c["protocol"] == "TLSv1.2"]


def handshake(server, client, s_in, s_out, c_in, c_out):
    done = [False, False]
    for _ in range(20):
        for i, obj in enumerate((client, server)):
            if done[i]:
                continue
            try:
                obj.do_handshake()
                done[i] = True
            except ssl.SSLWantReadError:
                pass
        s_in.write(c_out.read())
        c_in.write(s_out.read())
        if all(done):
            return
    raise AssertionError("handshake did not complete")


class TestTlsContext:
    """Test context settings for both sides."""

    @pytest.mark.parametrize("server_side", [True, False])
    def test_common_settings(self, pair, server_side):
        """Test settings shared by both sides."""
        ctx = tls_context(pair, server_side=server_side)
        assert ctx.minimum_version == ssl.TLSVersion.TLSv1_2
        assert ctx.maximum_version == ssl.TLSVersion.TLSv1_2
        assert ctx.options & ssl.OP_NO_TICKET
        assert ctx.options & ssl.OP_CIPHER_SERVER_PREFERENCE
        assert tls12_ciphers(ctx) == [CIPHER_SUITE]

    def test_server_requests_client_certificate(self, pair):
        """Test the server asks for a client certificate."""
        ctx = server_tls_context(pair)
        assert ctx.verify_mode == ssl.CERT_OPTIONAL

    def test_client_skips_verification(self, pair):
        """Test the client does not verify the server."""
        ctx = client_tls_context(pair)
        assert ctx.check_hostname is False
        assert ctx.verify_mode == ssl.CERT_NONE

    def test_missing_certificate(self, tmp_path):
        """Test missing certificate files raise OSError."""
        missing = CertKeyPair(certfile=str(tmp_path / "cert.pem"), keyfile=str(tmp_path / "key.pem"))
        with pytest.raises(OSError):
            client_tls_context(missing)

    def test_handshake(self, pair):
        """Test a full handshake negotiates the pinned suite and h2."""
        s_in, s_out, c_in, c_out = ssl.MemoryBIO(), ssl.MemoryBIO(), ssl.MemoryBIO(), ssl.MemoryBIO()
        server = server_tls_context(pair).wrap_bio(s_in, s_out, server_side=True)
        client = client_tls_context(pair).wrap_bio(c_in, c_out, server_hostname="tunnel.test")

        handshake(server, client, s_in, s_out, c_in, c_out)

        assert client.version() == "TLSv1.2"
        assert client.cipher()[0] == CIPHER_SUITE
        assert client.selected_alpn_protocol() == ALPN_PROTOCOL
        assert server.selected_alpn_protocol() == ALPN_PROTOCOL
        # client certificate was requested and sent
        assert server.getpeercert(binary_form=True)

    def test_foreign_client_certificate_is_rejected(self, pair):
        """Test the server rejects a client certificate other than the pair's."""
        stranger = CertKeyPair(
            certfile=os.path.join(FIXTURES, "other_cert.pem"),
            keyfile=os.path.join(FIXTURES, "other_key.pem"),
        )
        s_in, s_out, c_in, c_out = ssl.MemoryBIO(), ssl.MemoryBIO(), ssl.MemoryBIO(), ssl.MemoryBIO()
        server = server_tls_context(pair).wrap_bio(s_in, s_out, server_side=True)
        client = client_tls_context(stranger).wrap_bio(c_in, c_out, server_hostname="tunnel.test")

        with pytest.raises(ssl.SSLError):
            handshake(server, client, s_in, s_out, c_in, c_out)

    def test_client_without_certificate_is_accepted(self, pair):
        """Test the client certificate is optional."""
        ctx = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
        s_in, s_out, c_in, c_out = ssl.MemoryBIO(), ssl.MemoryBIO(), ssl.MemoryBIO(), ssl.MemoryBIO()
        server = server_tls_context(pair).wrap_bio(s_in, s_out, server_side=True)
        client = ctx.wrap_bio(c_in, c_out, server_hostname="tunnel.test")

        handshake(server, client, s_in, s_out, c_in, c_out)

        assert client.cipher()[0] == CIPHER_SUITE
        assert server.getpeercert() is None
