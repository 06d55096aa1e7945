"""Rendering of a :class:`Message` into protocol-level message text."""

from __future__ import annotations

from sendmail_shim.exceptions import MissingRecipientError, MissingSenderError
from sendmail_shim.message.addresses import format_address, format_addresses
from sendmail_shim.message.reader import CRLF
from sendmail_shim.models import Message


def render_message(message: Message) -> str:
    """Render the message headers and body.

    Headers are emitted in a fixed order: From, Sender, Reply-To (if any), To,
    CC (if any), Subject, then the unrecognized headers verbatim. Sender always
    repeats From. Bcc recipients are never written into the text.

    Args:
        message: Fully populated message.

    Returns:
        CRLF-delimited message text.

    Raises:
        MissingSenderError: No sender address was resolved.
        MissingRecipientError: ``to`` is empty or its first address is empty.
    """

    if message.from_addr is None or not message.from_addr.address:
        raise MissingSenderError("Invalid email: no sender")

    if not message.to or not message.to[0].address:
        raise MissingRecipientError("Invalid email: no 'To' recipient")

    sender = format_address(message.from_addr)
    lines = [f"From: {sender}", f"Sender: {sender}"]

    if message.reply_to:
        lines.append(f"Reply-To: {format_addresses(message.reply_to)}")

    lines.append(f"To: {format_addresses(message.to)}")

    if message.cc:
        lines.append(f"CC: {format_addresses(message.cc)}")

    lines.append(f"Subject: {message.subject}")

    headers = "".join(line + CRLF for line in lines)
    return headers + message.extra_headers + CRLF + message.body
