"""Mail submission orchestration.

This module ties composition, the send log and SMTP delivery together.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from sendmail_shim.config import Settings
from sendmail_shim.exceptions import DeliveryError, SendLogError
from sendmail_shim.message import render_message
from sendmail_shim.models import Message
from sendmail_shim.sendlog import SendLogWriter
from sendmail_shim.transport import SmtpTransport, build_envelope

logger = structlog.get_logger()


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of one submission."""

    logged: bool
    delivered: bool
    log_error: str | None = None
    delivery_error: str | None = None


class MailSubmitter:
    """Submits composed messages.

    The log write always comes first and is best effort. Composition failures
    then abort the submission before any SMTP connection is made. The log
    write and the delivery are independent and neither failure blocks the
    other.
    """

    def __init__(
        self,
        transport: SmtpTransport | None = None,
        send_log: SendLogWriter | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the submitter.

        Args:
            transport: SMTP transport. If None, creates one from settings.
            send_log: Send log writer. If None, writes to ``settings.log_file``.
            settings: Application settings. If None, uses default settings.
        """
        from sendmail_shim.config import get_settings

        self.settings = settings or get_settings()
        self.transport = transport or SmtpTransport(self.settings)
        self.send_log = send_log or SendLogWriter(self.settings.log_file)

    def submit(self, message: Message) -> SubmissionResult:
        """Log, render and deliver a message.

        Args:
            message: Fully populated message. Not modified.

        Returns:
            SubmissionResult: Which of the log write and delivery succeeded.

        Raises:
            CompositionError: No sender or no recipient was resolved. The log
                record has already been attempted, nothing was sent.
            ConfigurationError: The SMTP server setting is unusable.
        """

        log_error: str | None = None
        try:
            self.send_log.append(message)
        except SendLogError as exc:
            logger.error("send_log_failed", error=str(exc))
            log_error = str(exc)

        raw = render_message(message)
        envelope = build_envelope(message)

        delivery_error: str | None = None
        try:
            self.transport.deliver(envelope, raw)
        except DeliveryError as exc:
            delivery_error = str(exc)

        result = SubmissionResult(
            logged=self.send_log.enabled and log_error is None,
            delivered=delivery_error is None,
            log_error=log_error,
            delivery_error=delivery_error,
        )
        logger.info(
            "submission_completed",
            sender=envelope.sender,
            recipient_count=len(envelope.recipients),
            logged=result.logged,
            delivered=result.delivered,
        )
        return result
