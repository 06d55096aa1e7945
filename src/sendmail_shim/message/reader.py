"""Reader for the message supplied on standard input.

The input is an optional block of ``Name: value`` header lines, a blank line,
and a free-form body. Recognized headers are lifted into the :class:`Message`
fields; everything else is kept verbatim in ``extra_headers``.
"""

from __future__ import annotations

import structlog

from sendmail_shim.exceptions import MalformedInputError
from sendmail_shim.message.addresses import parse_addresses
from sendmail_shim.models import Message

logger = structlog.get_logger()

CRLF = "\r\n"

# Lower-cased header name -> Message attribute holding an address list.
_ADDRESS_LIST_HEADERS = {
    "reply-to": "reply_to",
    "to": "to",
    "cc": "cc",
    "bcc": "bcc",
}


def _normalize_line_endings(content: str) -> str:
    # Input using bare LF throughout is upgraded; mixed input is left alone.
    if CRLF not in content:
        return content.replace("\n", CRLF)
    return content


def _apply_from(message: Message, value: str) -> None:
    if message.from_addr is not None:
        return

    addresses = parse_addresses(value)
    if len(addresses) != 1:
        raise MalformedInputError(
            f"From header must contain exactly one address, found {len(addresses)}"
        )
    message.from_addr = addresses[0]


def _apply_address_list(message: Message, attr: str, value: str) -> None:
    if getattr(message, attr) is not None:
        return

    addresses = parse_addresses(value)
    if addresses:
        setattr(message, attr, addresses)


def populate_from_input(message: Message, raw: bytes) -> None:
    """Parse a raw message and merge it into ``message``.

    Address fields already set (by the command line, or by an earlier header of
    the same kind) are left untouched. When the first line of the would-be
    header block has no colon, the input is taken to have no headers at all and
    becomes the body unchanged.

    Bytes that are not valid UTF-8 are kept as surrogate escapes so the
    rendered message can be encoded back to the original bytes.

    Args:
        message: Message being assembled; modified in place.
        raw: Complete standard input.

    Raises:
        MalformedInputError: A header line after the first lacks a colon, or
            the From header does not hold exactly one address.
    """

    content = _normalize_line_endings(raw.decode("utf-8", errors="surrogateescape"))

    head, separator, body = content.partition(CRLF * 2)
    if not separator:
        logger.debug("message_without_header_block", body_length=len(content))
        message.body = content
        return

    message.body = body

    for index, line in enumerate(head.split(CRLF)):
        name, colon, value = line.partition(":")
        if not colon:
            if index != 0:
                raise MalformedInputError(f"Malformed header line {index + 1}: {line!r}")

            logger.debug("header_block_not_recognized", first_line_length=len(line))
            message.body = content
            return

        value = value.strip(" ")
        key = name.lower()

        if key == "from":
            _apply_from(message, value)
        elif key == "sender":
            # Sender is always rendered from From.
            continue
        elif key in _ADDRESS_LIST_HEADERS:
            _apply_address_list(message, _ADDRESS_LIST_HEADERS[key], value)
        elif key == "subject":
            message.subject = value
        else:
            message.extra_headers += line + CRLF

    logger.debug(
        "message_headers_parsed",
        has_sender=message.from_addr is not None,
        extra_headers_length=len(message.extra_headers),
    )
