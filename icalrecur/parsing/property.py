"""Library for splitting recurrence content lines and rule values.

This is a very small tokenizer that only understands the structure of the
recurrence properties and does not interpret the values themselves. Given
a content line of:

  RRULE:FREQ=WEEKLY;COUNT=3

The line is first split into the property name and the remainder:

  ParsedContentLine(name='RRULE', value='FREQ=WEEKLY;COUNT=3')

And the rule value is then split into its KEY=VALUE parts:

  [('FREQ', 'WEEKLY'), ('COUNT', '3')]
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from icalrecur.exceptions import (
    EmptyInputError,
    MalformedLineError,
    MalformedPropertyError,
    MissingValueError,
)

_LOGGER = logging.getLogger(__name__)

_NAME_DELIMITERS = (";", ":")
_PART_DELIMITER = ";"
_KEY_VALUE_DELIMITER = "="


def _find_first(line: str, chars: Sequence[str]) -> int | None:
    """Find the earliest occurrence of any of the given characters in the line."""
    earliest: int | None = None
    for char in chars:
        pos = line.find(char)
        if pos != -1 and (earliest is None or pos < earliest):
            earliest = pos
    return earliest


@dataclass
class ParsedContentLine:
    """A recurrence content line split into property name and remainder."""

    name: str
    value: str


def parse_contentline(line: str) -> ParsedContentLine:
    """Split a content line on the first ';' or ':' after the property name."""
    if (pos := _find_first(line, _NAME_DELIMITERS)) is None:
        raise MalformedLineError(
            f"Expected ';' or ':' after the property name: '{line}'", line=line
        )
    return ParsedContentLine(name=line[:pos], value=line[pos + 1 :])


def parse_rule_parts(value: str) -> list[tuple[str, str]]:
    """Split a rule value like 'FREQ=YEARLY;BYMONTH=4' into key/value pairs.

    Keys are returned as they appear in the input, in order, including any
    repeated keys.
    """
    value = value.strip()
    if not value:
        raise EmptyInputError("Recurrence rule is empty")
    result: list[tuple[str, str]] = []
    for part in value.split(_PART_DELIMITER):
        key_value = part.split(_KEY_VALUE_DELIMITER)
        if len(key_value) != 2:
            raise MalformedPropertyError(
                f"Recurrence rule part is not in KEY=VALUE format: '{part}'",
                part=part,
            )
        key, part_value = key_value
        if not part_value:
            raise MissingValueError(key)
        result.append((key, part_value))
    _LOGGER.debug("parse_rule_parts returned %s", result)
    return result
