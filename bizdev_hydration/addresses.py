"""Recipient header parsing, ``"Name <addr>"`` or a bare address."""

from __future__ import annotations

import email.utils
import re

from .models import ParsedAddress

# Trailing "<addr>", for headers parseaddr rejects, e.g. an unquoted "Doe, Jane <jane@x.com>"
_TRAILING_ANGLE_ADDR_RE = re.compile(r"<([^<>\s]+@[^<>\s]+)>\s*$")


def _valid_address(addr: str) -> bool:
    return "@" in addr and not any(ch.isspace() for ch in addr)


def parse_email_header(raw: str | None) -> ParsedAddress:
    """Extract the display name and address from a "to" header value.

    The address is trimmed and lowercased.  Values whose address part has no
    ``@`` or contains whitespace parse to an empty :class:`ParsedAddress`.
    """
    if not raw or not raw.strip():
        return ParsedAddress()
    raw = raw.strip()

    name, addr = email.utils.parseaddr(raw)
    addr = addr.strip().lower()
    if not _valid_address(addr):
        match = _TRAILING_ANGLE_ADDR_RE.search(raw)
        if match is None:
            return ParsedAddress()
        name, addr = raw[: match.start()], match.group(1).lower()

    name = name.strip().strip('"').strip()
    return ParsedAddress(name=name or None, email=addr)


def first_name_from_display_name(name: str | None) -> str | None:
    """First given-name token of a display name.

    ``"Last, First"`` names yield the token after the comma.
    """
    if not name:
        return None
    if "," in name:
        last, _, rest = name.partition(",")
        name = rest if rest.strip() else last
    parts = name.split()
    return parts[0] if parts else None
