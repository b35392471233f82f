"""Parsing and encoding of a recurrence set from a block of content lines.

This is the entry point for reading a full recurrence definition such as:

  RRULE:FREQ=DAILY;COUNT=5
  EXDATE:20250101T000000Z,20250102T000000Z

Each line is classified by its property name and the parsed value is added
to a `RecurrenceContainer`, which is a `RuleSet` unless another container
is supplied. Values are added in the order they appear and the first error
aborts the whole set.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeVar, overload

from .exceptions import (
    EmptyInputError,
    RecurParseError,
    RecurrenceError,
    RecurrenceSetParseError,
    UnsupportedPropertyError,
)
from .iter import RecurrenceContainer, RuleSet
from .parsing.property import parse_contentline
from .types.date_time import parse_date_time_list
from .types.recur import Recur

__all__ = [
    "RecurrenceContainer",
    "encode_recurrences",
    "parse_recurrences",
    "parse_recurrences_str",
]

_LOGGER = logging.getLogger(__name__)

RRULE = "RRULE"
EXRULE = "EXRULE"
RDATE = "RDATE"
EXDATE = "EXDATE"
_PROPERTY_NAMES = (RRULE, EXRULE, RDATE, EXDATE)

_C = TypeVar("_C", bound=RecurrenceContainer)


@dataclass
class _ParsedValue:
    """A parsed value waiting to be added to the container."""

    name: str
    line: str
    value: Recur | datetime.datetime


def _parse_line(line: str, tzinfo: datetime.tzinfo) -> list[_ParsedValue]:
    """Parse a single normalized content line."""
    contentline = parse_contentline(line)
    if (name := contentline.name) not in _PROPERTY_NAMES:
        raise UnsupportedPropertyError(name)
    _LOGGER.debug("Parsing recurrence property %s", name)
    values: list[Recur] | list[datetime.datetime]
    try:
        if name in (RRULE, EXRULE):
            values = [Recur.from_rrule(contentline.value, tzinfo)]
        else:
            values = parse_date_time_list(contentline.value, tzinfo)
    except RecurParseError as err:
        raise RecurrenceSetParseError(
            f"Failed to parse {name} line: {line}",
            line=line,
            detailed_error=str(err),
        ) from err
    return [_ParsedValue(name, line, value) for value in values]


def _add_value(container: RecurrenceContainer, parsed: _ParsedValue) -> None:
    """Add a parsed value to the collection for its property."""
    if isinstance(parsed.value, Recur):
        if parsed.name == RRULE:
            container.rrule(parsed.value)
        else:
            container.exrule(parsed.value)
    elif parsed.name == RDATE:
        container.rdate(parsed.value)
    else:
        container.exdate(parsed.value)


@overload
def parse_recurrences(
    lines: Iterable[str],
    *,
    tzinfo: datetime.tzinfo = ...,
    container: None = None,
) -> RuleSet: ...


@overload
def parse_recurrences(
    lines: Iterable[str],
    *,
    tzinfo: datetime.tzinfo = ...,
    container: _C,
) -> _C: ...


def parse_recurrences(
    lines: Iterable[str],
    *,
    tzinfo: datetime.tzinfo = datetime.timezone.utc,
    container: RecurrenceContainer | None = None,
) -> RecurrenceContainer:
    """Parse RRULE, EXRULE, RDATE and EXDATE content lines into a recurrence set.

    Lines are trimmed and upper cased before they are parsed and blank lines
    are skipped. The tzinfo is the reference timezone for dates without a
    UTC marker. Errors from the value of a line are raised as a
    `RecurrenceSetParseError` with the original error as the cause. All
    lines are parsed before anything is added to the container.
    """
    parsed_values: list[_ParsedValue] = []
    for line in lines:
        line = line.strip().upper()
        if not line:
            continue
        parsed_values.extend(_parse_line(line, tzinfo))

    result = container if container is not None else RuleSet()
    for parsed in parsed_values:
        try:
            _add_value(result, parsed)
        except RecurrenceError as err:
            raise RecurrenceSetParseError(
                f"Failed to add {parsed.name} line: {parsed.line}",
                line=parsed.line,
                detailed_error=str(err),
            ) from err
    return result


@overload
def parse_recurrences_str(
    value: str,
    *,
    tzinfo: datetime.tzinfo = ...,
    container: None = None,
) -> RuleSet: ...


@overload
def parse_recurrences_str(
    value: str,
    *,
    tzinfo: datetime.tzinfo = ...,
    container: _C,
) -> _C: ...


def parse_recurrences_str(
    value: str,
    *,
    tzinfo: datetime.tzinfo = datetime.timezone.utc,
    container: RecurrenceContainer | None = None,
) -> RecurrenceContainer:
    """Parse a newline separated block of recurrence content lines."""
    value = value.strip()
    if not value:
        raise EmptyInputError("Recurrence set is empty")
    lines = value.split("\n")
    if container is None:
        return parse_recurrences(lines, tzinfo=tzinfo)
    return parse_recurrences(lines, tzinfo=tzinfo, container=container)


def encode_recurrences(container: RecurrenceContainer) -> str:
    """Encode the recurrence set as newline separated content lines."""
    return "\n".join(container.recurrence())
