"""IPv4 address validation for key allow-lists."""
from __future__ import annotations

import ipaddress
import re

from core.errors import ValidationError

_DOTTED_QUAD_RE = re.compile(r"^\d{1,3}(\.\d{1,3}){3}$")


def parse_ipv4(value: object) -> str:
    """Return ``value`` if it is a dotted-quad IPv4 address, else raise ValidationError."""
    if not isinstance(value, str) or not _DOTTED_QUAD_RE.fullmatch(value):
        raise ValidationError(f"Invalid IPv4 address: {value!r}")
    try:
        return str(ipaddress.IPv4Address(value))
    except ValueError:
        raise ValidationError(f"Invalid IPv4 address: {value!r}") from None


def is_ipv4(value: object) -> bool:
    try:
        parse_ipv4(value)
        return True
    except ValidationError:
        return False
