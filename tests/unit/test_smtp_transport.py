"""Unit tests for the SMTP transport."""

import pytest

from sendmail_shim.config import Settings
from sendmail_shim.exceptions import ConfigurationError, DeliveryError
from sendmail_shim.transport import Envelope, SmtpTransport
from sendmail_shim.transport.smtp import split_host_port

ENVELOPE = Envelope(sender="alice@example.com", recipients=("bob@example.com", "eve@example.com"))
RAW = "From: alice@example.com\r\nTo: bob@example.com\r\nSubject: Grüße\r\n\r\nHello"


class TestSplitHostPort:
    """Test suite for split_host_port."""

    def test_host_and_port(self) -> None:
        assert split_host_port("mail.example.com:587") == ("mail.example.com", 587)

    def test_bracketed_ipv6(self) -> None:
        assert split_host_port("[::1]:25") == ("::1", 25)

    @pytest.mark.parametrize("server", ["mail.example.com", "", ":25", "mail.example.com:smtp"])
    def test_invalid_server(self, server: str) -> None:
        with pytest.raises(ConfigurationError):
            split_host_port(server)


class TestSmtpTransport:
    """Test suite for SmtpTransport."""

    def test_deliver_with_starttls_and_auth(self, settings: Settings, fake_smtp) -> None:
        SmtpTransport(settings).deliver(ENVELOPE, RAW)

        (client,) = fake_smtp.instances
        assert (client.host, client.port, client.timeout) == ("mail.test", 587, 30.0)
        assert client.calls == [
            ("ehlo",),
            ("starttls",),
            ("ehlo",),
            ("login", "mailer", "s3cret"),
            (
                "sendmail",
                "alice@example.com",
                ["bob@example.com", "eve@example.com"],
                RAW.encode("utf-8"),
            ),
        ]
        assert client.closed is True

    def test_starttls_skipped_when_not_offered(self, settings: Settings, fake_smtp) -> None:
        fake_smtp.extensions = {"auth"}

        SmtpTransport(settings).deliver(ENVELOPE, RAW)

        assert ("starttls",) not in fake_smtp.instances[0].calls

    def test_starttls_can_be_disabled(self, settings: Settings, fake_smtp) -> None:
        settings.smtp_starttls = False

        SmtpTransport(settings).deliver(ENVELOPE, RAW)

        assert ("starttls",) not in fake_smtp.instances[0].calls

    def test_no_login_without_user(self, settings: Settings, fake_smtp) -> None:
        settings.smtp_user = ""

        SmtpTransport(settings).deliver(ENVELOPE, RAW)

        assert [c[0] for c in fake_smtp.instances[0].calls] == ["ehlo", "starttls", "ehlo", "sendmail"]

    def test_user_configured_but_auth_not_offered(self, settings: Settings, fake_smtp) -> None:
        fake_smtp.extensions = {"starttls"}

        with pytest.raises(DeliveryError, match="AUTH"):
            SmtpTransport(settings).deliver(ENVELOPE, RAW)

    def test_authentication_failure(self, settings: Settings, fake_smtp) -> None:
        fake_smtp.fail_on = "login"

        with pytest.raises(DeliveryError, match="Authentication failed"):
            SmtpTransport(settings).deliver(ENVELOPE, RAW)

    def test_connection_failure(self, settings: Settings, fake_smtp) -> None:
        fake_smtp.fail_on = "connect"

        with pytest.raises(DeliveryError):
            SmtpTransport(settings).deliver(ENVELOPE, RAW)

    def test_refused_recipient(self, settings: Settings, fake_smtp) -> None:
        fake_smtp.refused = {"eve@example.com": (550, b"No such user")}

        with pytest.raises(DeliveryError, match="eve@example.com"):
            SmtpTransport(settings).deliver(ENVELOPE, RAW)

    def test_missing_port(self, settings: Settings, fake_smtp) -> None:
        settings.smtp_server = "mail.test"

        with pytest.raises(ConfigurationError):
            SmtpTransport(settings).deliver(ENVELOPE, RAW)

        assert fake_smtp.instances == []

    def test_undecodable_bytes_are_sent_unchanged(self, settings: Settings, fake_smtp) -> None:
        raw = b"Subject: caf\xe9\r\n\r\ncr\xe8me".decode("utf-8", errors="surrogateescape")

        SmtpTransport(settings).deliver(ENVELOPE, raw)

        assert fake_smtp.instances[0].calls[-1][3] == b"Subject: caf\xe9\r\n\r\ncr\xe8me"
