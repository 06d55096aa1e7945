"""SMTP envelope derived from a composed message."""

from __future__ import annotations

from dataclasses import dataclass

from sendmail_shim.exceptions import MissingSenderError
from sendmail_shim.models import Message


@dataclass(frozen=True)
class Envelope:
    """Addresses handed to the SMTP ``MAIL FROM`` and ``RCPT TO`` commands."""

    sender: str
    recipients: tuple[str, ...]


def build_envelope(message: Message) -> Envelope:
    """Collect the envelope sender and every To, CC and Bcc address, in that order.

    Duplicates are kept.
    """

    if message.from_addr is None:
        raise MissingSenderError("Invalid email: no sender")

    recipients = [
        a.address
        for group in (message.to, message.cc, message.bcc)
        for a in (group or [])
    ]
    return Envelope(sender=message.from_addr.address, recipients=tuple(recipients))
