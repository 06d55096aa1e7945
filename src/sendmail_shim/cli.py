"""Command-line interface for sendmail-shim.

This module provides the sendmail-compatible entry point. Arguments follow the
loose sendmail convention and are interpreted by
:func:`sendmail_shim.message.populate_from_args` rather than ``argparse``.
"""

from __future__ import annotations

import logging
import sys
from typing import BinaryIO

import structlog
from pydantic import ValidationError

from sendmail_shim import __version__
from sendmail_shim.config import Settings, get_settings
from sendmail_shim.exceptions import (
    CompositionError,
    ConfigurationError,
    InputReadError,
    MalformedInputError,
)
from sendmail_shim.message import populate_from_args, populate_from_input
from sendmail_shim.models import Message
from sendmail_shim.submission import MailSubmitter

logger = structlog.get_logger()

# sysexits(3) codes, as expected by programs that call sendmail.
EX_OK = 0
EX_DATAERR = 65
EX_IOERR = 74
EX_TEMPFAIL = 75
EX_CONFIG = 78


def _configure_logging(settings: Settings) -> None:
    if settings.debug:
        level = logging.DEBUG
    else:
        level = getattr(logging, settings.log_level.upper(), logging.INFO)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _read_input(stream: BinaryIO) -> bytes:
    try:
        return stream.read()
    except OSError as exc:
        raise InputReadError(f"Cannot read message from standard input: {exc}") from exc


def main(
    args: list[str] | None = None,
    stdin: BinaryIO | None = None,
    submitter: MailSubmitter | None = None,
) -> int:
    """Main entry point for the sendmail-shim command.

    Args:
        args: Command-line arguments. If None, uses sys.argv.
        stdin: Binary stream holding the message. If None, uses standard input.
        submitter: Submitter to use. If None, builds one from settings.

    Returns:
        Exit code (0 when the message was delivered, a sysexits code otherwise).
    """
    if args is None:
        args = sys.argv[1:]
    if stdin is None:
        stdin = sys.stdin.buffer

    try:
        settings = get_settings()
    except ValidationError as exc:
        sys.stderr.write(f"sendmail-shim: invalid configuration: {exc}\n")
        return EX_CONFIG

    _configure_logging(settings)
    logger.debug("sendmail_shim_started", version=__version__, arg_count=len(args))

    message = Message()
    populate_from_args(message, args)

    try:
        populate_from_input(message, _read_input(stdin))
    except InputReadError as exc:
        logger.error("input_read_failed", error=str(exc))
        return EX_IOERR
    except MalformedInputError as exc:
        logger.error("malformed_input", error=str(exc))
        return EX_DATAERR

    submitter = submitter or MailSubmitter(settings=settings)
    try:
        result = submitter.submit(message)
    except CompositionError as exc:
        logger.error("message_incomplete", error=str(exc))
        return EX_DATAERR
    except ConfigurationError as exc:
        logger.error("configuration_error", error=str(exc))
        return EX_CONFIG

    if not result.delivered:
        sys.stderr.write(f"sendmail-shim: delivery failed: {result.delivery_error}\n")
        return EX_TEMPFAIL

    return EX_OK


if __name__ == "__main__":
    sys.exit(main())
