"""Parsing and composition of outgoing messages."""

from sendmail_shim.message.addresses import format_address, format_addresses, parse_addresses
from sendmail_shim.message.arguments import populate_from_args
from sendmail_shim.message.composer import render_message
from sendmail_shim.message.reader import populate_from_input

__all__ = [
    "format_address",
    "format_addresses",
    "parse_addresses",
    "populate_from_args",
    "populate_from_input",
    "render_message",
]
