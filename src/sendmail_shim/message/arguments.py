"""Interpretation of sendmail-style command-line tokens.

Only the parts of the sendmail calling convention that influence the message
are understood here: the envelope sender (``-f``/``-r``), the ``-t`` switch and
bare recipient addresses. Every other flag is accepted and ignored.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

import structlog

from sendmail_shim.models import EmailAddress, Message

logger = structlog.get_logger()

SENDER_FLAGS = ("-f", "-r")
RECIPIENTS_IN_BODY_FLAG = "-t"

_ATTACHED_SENDER = re.compile(r"-[fr](?P<address>[^@\s]+@[^@\s]+)")
_SENDER_ADDRESS = re.compile(r"[^@\s]+@[^@\s]+")
_LOOSE_ADDRESS = re.compile(r"\S+@\S+")


def _scan_sender(tokens: Sequence[str]) -> tuple[str | None, set[int]]:
    """Return the last sender given on the command line and the consumed value indexes."""

    sender: str | None = None
    consumed: set[int] = set()

    for i, token in enumerate(tokens):
        match = _ATTACHED_SENDER.match(token)
        if match:
            sender = match.group("address")
            continue

        # Separated form: "-f alice@example.com".
        if token in SENDER_FLAGS and i + 1 < len(tokens):
            value = _SENDER_ADDRESS.match(tokens[i + 1])
            if value:
                sender = value.group(0)
                consumed.add(i + 1)

    return sender, consumed


def populate_from_args(message: Message, tokens: Sequence[str]) -> None:
    """Apply command-line tokens to a message.

    Sets ``from_addr`` from the last sender flag, and unless ``-t`` is present
    collects every address-shaped, non-flag token into ``to``. Must run before
    :func:`sendmail_shim.message.reader.populate_from_input` so that the
    command-line sender takes precedence over a ``From:`` header.

    Args:
        message: Message being assembled; modified in place.
        tokens: Command-line arguments without the program name.
    """

    sender, consumed = _scan_sender(tokens)
    if sender is not None:
        message.from_addr = EmailAddress(address=sender)
        logger.debug("sender_from_args", sender=sender)

    if RECIPIENTS_IN_BODY_FLAG in tokens:
        logger.debug("recipients_from_message_requested")
        return

    recipients = [
        EmailAddress(address=token)
        for i, token in enumerate(tokens)
        if i not in consumed
        and token
        and not token.startswith("-")
        and _LOOSE_ADDRESS.search(token)
    ]
    if recipients and message.to is None:
        message.to = recipients
        logger.debug("recipients_from_args", recipient_count=len(recipients))
