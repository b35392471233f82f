"""Library for parsing and encoding weekday values in recurrence rules.

A weekday has a two letter day code optionally preceded by a signed
occurrence, for example "TU", "+2TU" or "-1FR". An occurrence of 0 means
every instance of that day within the period of the rule.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from icalrecur.exceptions import UnknownWeekdayError

from .integer import parse_int

_LOGGER = logging.getLogger(__name__)


# Note: This can be StrEnum in python 3.11 and higher
class Weekday(str, enum.Enum):
    """Corresponds to a day of the week."""

    MONDAY = "MO"
    TUESDAY = "TU"
    WEDNESDAY = "WE"
    THURSDAY = "TH"
    FRIDAY = "FR"
    SATURDAY = "SA"
    SUNDAY = "SU"

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


_WEEKDAYS = {weekday.value: weekday for weekday in Weekday}


@dataclass(frozen=True)
class WeekdayValue:
    """Holds a weekday value and optional occurrence value."""

    weekday: Weekday
    """Day of the week value."""

    occurrence: int = 0
    """The occurrence value indicates the nth occurrence.

    Indicates the nth occurrence of a specific day within the MONTHLY or
    YEARLY "RRULE". For example +1 represents the first Monday of the
    month, or -1 represents the last Monday of the month. Zero means
    every occurrence.
    """

    def __str__(self) -> str:
        """Return the WeekdayValue as an encoded string."""
        if not self.occurrence:
            return str(self.weekday)
        return f"{self.occurrence:+d}{self.weekday}"

    @classmethod
    def parse(cls, value: str) -> WeekdayValue:
        """Parse a weekday with an optional occurrence prefix."""
        if len(value) < 2:
            raise UnknownWeekdayError(value)
        if (weekday := _WEEKDAYS.get(value[-2:])) is None:
            raise UnknownWeekdayError(value)
        occurrence = 0
        if len(value) > 2:
            occurrence = parse_int(value[:-2])
        return cls(weekday=weekday, occurrence=occurrence)


def parse_weekday_list(value: str) -> list[WeekdayValue]:
    """Parse a comma separated BYDAY value."""
    result = [WeekdayValue.parse(part) for part in value.split(",")]
    _LOGGER.debug("parse_weekday_list returned %s", result)
    return result
