"""Library for parsing and encoding INTEGER values and lists of them."""

from __future__ import annotations

import re
from collections.abc import Sequence

from icalrecur.exceptions import NumericParseError

INTEGER_REGEX = re.compile(r"^[-+]?[0-9]+$")


def parse_int(value: str) -> int:
    """Parse a rfc5545 signed decimal integer."""
    if not INTEGER_REGEX.fullmatch(value):
        raise NumericParseError(value)
    return int(value)


def parse_int_list(value: str) -> list[int]:
    """Parse a comma separated list of integers such as a BYMONTHDAY value."""
    return [parse_int(part) for part in value.split(",")]


def encode_int_list(values: Sequence[int]) -> str:
    """Encode integers as a comma separated list."""
    return ",".join(str(value) for value in values)
