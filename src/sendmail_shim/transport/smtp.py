"""SMTP submission client.

Delivers an already rendered message to the configured submission server with
``smtplib``: EHLO, STARTTLS when offered, AUTH when credentials are configured,
then a single ``sendmail`` transaction. Failures are not retried.
"""

from __future__ import annotations

import smtplib
import ssl

import structlog

from sendmail_shim.config import Settings
from sendmail_shim.exceptions import ConfigurationError, DeliveryError
from sendmail_shim.transport.envelope import Envelope

logger = structlog.get_logger()


def split_host_port(server: str) -> tuple[str, int]:
    """Split ``host:port`` (or ``[v6addr]:port``) into its parts.

    Raises:
        ConfigurationError: The port is missing or not a number.
    """

    host, sep, port = server.rpartition(":")
    if not sep or not host:
        raise ConfigurationError(f"SMTP server {server!r} must be given as host:port")

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]

    try:
        return host, int(port)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid port in SMTP server {server!r}") from exc


class SmtpTransport:
    """Authenticated SMTP submission to a single remote server."""

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the transport.

        Args:
            settings: Application settings. If None, uses default settings.
        """
        from sendmail_shim.config import get_settings

        self.settings = settings or get_settings()

    def deliver(self, envelope: Envelope, raw_message: str) -> None:
        """Submit one message.

        Args:
            envelope: Envelope sender and recipients.
            raw_message: Rendered message text. Bytes that arrived undecodable
                (held as surrogate escapes) are sent back out unchanged.

        Raises:
            ConfigurationError: The server address has no port.
            DeliveryError: Connection, TLS, authentication or any SMTP command
                failed, or the server refused a recipient.
        """

        host, port = split_host_port(self.settings.smtp_server)

        logger.info(
            "smtp_delivery_started",
            host=host,
            port=port,
            sender=envelope.sender,
            recipient_count=len(envelope.recipients),
        )

        try:
            with smtplib.SMTP(host, port, timeout=self.settings.smtp_timeout) as client:
                client.ehlo()
                if self.settings.smtp_starttls and client.has_extn("starttls"):
                    client.starttls(context=ssl.create_default_context())
                    client.ehlo()

                if self.settings.smtp_user:
                    if not client.has_extn("auth"):
                        raise DeliveryError(f"SMTP server {host} does not support AUTH")
                    client.login(
                        self.settings.smtp_user,
                        self.settings.smtp_password.get_secret_value(),
                    )

                refused = client.sendmail(
                    envelope.sender,
                    list(envelope.recipients),
                    raw_message.encode("utf-8", errors="surrogateescape"),
                )
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("smtp_delivery_failed", host=host, port=port, error=str(exc))
            raise DeliveryError(str(exc)) from exc

        if refused:
            logger.error("smtp_recipients_refused", refused=sorted(refused))
            raise DeliveryError(f"Recipients refused: {', '.join(sorted(refused))}")

        logger.info("smtp_delivery_completed", host=host, port=port)
