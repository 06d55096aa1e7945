"""Parsing and formatting of comma-separated address lists.

The parser is deliberately simple: a list is split on top-level commas and each
unit is an optional display name followed by an optional ``<address>``. Display
names containing commas or angle brackets are not supported and will be split
incorrectly. Quoted names are not unquoted either.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from sendmail_shim.models import EmailAddress

# A bare address without brackets is captured by the ``name`` group and swapped
# over afterwards. This also accepts "addresses" containing spaces.
_ADDRESS_UNIT = re.compile(r"(?P<name>[^<>,]+)?(?:\s*<\s*(?P<address>[^<>,]+)>)?(?:,\s*)?")


def parse_addresses(text: str) -> list[EmailAddress]:
    """Parse a comma-separated address list.

    Empty units (from ``",,"``, a trailing comma or blank input) are dropped.
    Duplicates are kept.

    Args:
        text: Header value such as ``"Bob <bob@example.com>, carol@example.com"``.

    Returns:
        Addresses in input order.
    """

    result: list[EmailAddress] = []
    for match in _ADDRESS_UNIT.finditer(text):
        name = (match.group("name") or "").strip()
        address = (match.group("address") or "").strip()

        if not address:
            name, address = "", name

        if not address:
            continue

        result.append(EmailAddress(name=name, address=address))
    return result


def format_address(address: EmailAddress) -> str:
    """Render ``Name <addr>``, or the bare address when there is no name."""

    if address.name:
        return f"{address.name} <{address.address}>"
    return address.address


def format_addresses(addresses: Iterable[EmailAddress]) -> str:
    """Render an address list joined by ``","`` (no space), preserving order."""

    return ",".join(format_address(a) for a in addresses)
