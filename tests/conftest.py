"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import smtplib

import pytest
import structlog


@pytest.fixture
def settings(tmp_path):
    """Provide settings pointing at a fake server and a temporary log file."""
    from sendmail_shim.config import Settings

    return Settings(
        smtp_server="mail.test:587",
        smtp_user="mailer",
        smtp_password="s3cret",
        log_file=tmp_path / "sendmail.log",
        log_level="DEBUG",
    )


@pytest.fixture
def sample_stdin() -> bytes:
    """Provide a message as a mail user agent would pipe it in."""
    return (
        b"From: Alice <alice@example.com>\n"
        b"To: Bob <bob@example.com>, carol@example.com\n"
        b"Cc: dave@example.com\n"
        b"Bcc: eve@example.com\n"
        b"Subject: Quarterly report\n"
        b"X-Mailer: test-suite\n"
        b"\n"
        b"Numbers attached.\n"
    )


class FakeSMTP:
    """Stand-in for ``smtplib.SMTP`` recording the conversation."""

    extensions = {"starttls", "auth"}
    refused: dict[str, tuple[int, bytes]] = {}
    fail_on: str | None = None
    instances: list["FakeSMTP"] = []

    def __init__(self, host: str, port: int, timeout: float | None = None) -> None:
        if self.fail_on == "connect":
            raise ConnectionRefusedError(111, "Connection refused")
        self.host = host
        self.port = port
        self.timeout = timeout
        self.calls: list[tuple] = []
        self.closed = False
        type(self).instances.append(self)

    def __enter__(self) -> "FakeSMTP":
        return self

    def __exit__(self, *exc_info) -> None:
        self.closed = True

    def ehlo(self) -> None:
        self.calls.append(("ehlo",))

    def has_extn(self, name: str) -> bool:
        return name.lower() in self.extensions

    def starttls(self, context=None) -> None:
        self.calls.append(("starttls",))

    def login(self, user: str, password: str) -> None:
        self.calls.append(("login", user, password))
        if self.fail_on == "login":
            raise smtplib.SMTPAuthenticationError(535, b"5.7.8 Authentication failed")

    def sendmail(self, from_addr: str, to_addrs: list[str], msg: bytes) -> dict:
        self.calls.append(("sendmail", from_addr, to_addrs, msg))
        return dict(self.refused)


@pytest.fixture
def fake_smtp(monkeypatch):
    """Replace ``smtplib.SMTP`` in the transport with a fresh FakeSMTP subclass."""
    from sendmail_shim.transport import smtp

    fake = type("FakeSMTPForTest", (FakeSMTP,), {"instances": [], "refused": {}})
    monkeypatch.setattr(smtp.smtplib, "SMTP", fake)
    return fake


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo the logging configuration applied by ``cli.main``."""
    yield
    structlog.reset_defaults()
