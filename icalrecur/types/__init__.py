"""Library for parsing the value types used in recurrence properties."""

from .recur import Frequency, Recur
from .weekday import Weekday, WeekdayValue

__all__ = [
    "Frequency",
    "Recur",
    "Weekday",
    "WeekdayValue",
]
