"""Implementation of recurrence rules for calendar components.

This library handles the parsing of the rules into a pydantic model and
relies on the `dateutil.rrule` implementation for the actual implementation
of the date and time repetition.

Many existing libraries, such as UI components, support directly creating or
modifying recurrence rule strings. This is an example of parsing a rule,
expanding it, and writing it back out:

```python
from icalrecur.types.recur import Recur

recur = Recur.from_rrule("FREQ=WEEKLY;DTSTART=20220829T090000Z;COUNT=3")
print(list(recur.as_rrule()))
print(recur.as_rrule_str())
```

The above example will output something like this:
```
[datetime.datetime(2022, 8, 29, 9, 0, tzinfo=datetime.timezone.utc),
 datetime.datetime(2022, 9, 5, 9, 0, tzinfo=datetime.timezone.utc),
 datetime.datetime(2022, 9, 12, 9, 0, tzinfo=datetime.timezone.utc)]
FREQ=WEEKLY;DTSTART=20220829T090000Z;COUNT=3
```
"""

from __future__ import annotations

import datetime
import enum
import logging
from collections.abc import Callable
from typing import Any, Optional

from dateutil import rrule
from pydantic import BaseModel, ConfigDict, Field

from icalrecur.compat import duplicate_compat
from icalrecur.exceptions import (
    DuplicatePropertyError,
    MissingValueError,
    RecurrenceError,
    UnknownFrequencyError,
    UnknownPropertyError,
)
from icalrecur.parsing.property import parse_rule_parts
from icalrecur.util import dtstart_factory

from .date_time import encode_date_time, parse_date_time
from .integer import encode_int_list, parse_int, parse_int_list
from .weekday import Weekday, WeekdayValue, parse_weekday_list

_LOGGER = logging.getLogger(__name__)


class Frequency(str, enum.Enum):
    """Type of recurrence rule, in display order from YEARLY to SECONDLY."""

    YEARLY = "YEARLY"
    """Repeating events based on an interval of a year or more."""

    MONTHLY = "MONTHLY"
    """Repeating events based on an interval of a month or more."""

    WEEKLY = "WEEKLY"
    """Repeating events based on an interval of a week or more."""

    DAILY = "DAILY"
    """Repeating events based on an interval of a day or more."""

    HOURLY = "HOURLY"
    """Repeating events based on an interval of an hour or more."""

    MINUTELY = "MINUTELY"
    """Repeating events based on an interval of a minute or more."""

    SECONDLY = "SECONDLY"
    """Repeating events based on an interval of a second or more."""

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def parse(cls, value: str) -> Frequency:
        """Parse a FREQ value, matching the name exactly."""
        if (freq := _FREQUENCIES.get(value)) is None:
            raise UnknownFrequencyError(value)
        return freq


_FREQUENCIES = {freq.value: freq for freq in Frequency}

RRULE_FREQ = {
    Frequency.YEARLY: rrule.YEARLY,
    Frequency.MONTHLY: rrule.MONTHLY,
    Frequency.WEEKLY: rrule.WEEKLY,
    Frequency.DAILY: rrule.DAILY,
    Frequency.HOURLY: rrule.HOURLY,
    Frequency.MINUTELY: rrule.MINUTELY,
    Frequency.SECONDLY: rrule.SECONDLY,
}
RRULE_WEEKDAY = {
    Weekday.MONDAY: rrule.MO,
    Weekday.TUESDAY: rrule.TU,
    Weekday.WEDNESDAY: rrule.WE,
    Weekday.THURSDAY: rrule.TH,
    Weekday.FRIDAY: rrule.FR,
    Weekday.SATURDAY: rrule.SA,
    Weekday.SUNDAY: rrule.SU,
}
DEFAULT_WKST = WeekdayValue(Weekday.MONDAY)

# Decoders for each rule part keyed by the rule key, with the model field
# the decoded value is assigned to. The reference timezone is passed to every
# decoder and only used by the date/time values.
_PART_DECODERS: dict[str, tuple[str, Callable[[str, datetime.tzinfo], Any]]] = {
    "FREQ": ("freq", lambda value, _: Frequency.parse(value)),
    "DTSTART": ("dtstart", parse_date_time),
    "INTERVAL": ("interval", lambda value, _: parse_int(value)),
    "WKST": ("wkst", lambda value, _: WeekdayValue.parse(value)),
    "COUNT": ("count", lambda value, _: parse_int(value)),
    "UNTIL": ("until", parse_date_time),
    "BYSETPOS": ("by_setpos", lambda value, _: parse_int_list(value)),
    "BYMONTH": ("by_month", lambda value, _: parse_int_list(value)),
    "BYMONTHDAY": ("by_month_day", lambda value, _: parse_int_list(value)),
    "BYYEARDAY": ("by_year_day", lambda value, _: parse_int_list(value)),
    "BYWEEKNO": ("by_week_no", lambda value, _: parse_int_list(value)),
    "BYDAY": ("by_weekday", lambda value, _: parse_weekday_list(value)),
    "BYHOUR": ("by_hour", lambda value, _: parse_int_list(value)),
    "BYMINUTE": ("by_minute", lambda value, _: parse_int_list(value)),
    "BYSECOND": ("by_second", lambda value, _: parse_int_list(value)),
    "BYEASTER": ("by_easter", lambda value, _: parse_int_list(value)),
}

# Integer list parts in the order they are encoded, around BYDAY.
_INT_LIST_PARTS_BEFORE_BYDAY = (
    ("BYSETPOS", "by_setpos"),
    ("BYMONTH", "by_month"),
    ("BYMONTHDAY", "by_month_day"),
    ("BYYEARDAY", "by_year_day"),
    ("BYWEEKNO", "by_week_no"),
)
_INT_LIST_PARTS_AFTER_BYDAY = (
    ("BYHOUR", "by_hour"),
    ("BYMINUTE", "by_minute"),
    ("BYSECOND", "by_second"),
    ("BYEASTER", "by_easter"),
)


class Recur(BaseModel):
    """A type used to identify properties that contain a recurrence rule specification.

    An empty list or a zero value means the rule part is not set. The
    meaning of unset values, and of combinations of rule parts, is left
    to the `dateutil.rrule` expansion.
    """

    freq: Frequency

    dtstart: Optional[datetime.datetime] = None
    """The start of the recurrence when carried inside the rule."""

    interval: int = 0
    """Interval at which the recurrence rule repeats."""

    wkst: WeekdayValue = DEFAULT_WKST
    """The day on which the work week starts."""

    count: int = 0
    """The number of occurrences to bound the recurrence."""

    until: Optional[datetime.datetime] = None
    """The inclusive end date of the recurrence, or the last instance."""

    by_setpos: list[int] = Field(alias="bysetpos", default_factory=list)
    """Values that corresponds to the nth occurrence within the set of instances."""

    by_month: list[int] = Field(alias="bymonth", default_factory=list)
    """Month number between 1 and 12."""

    by_month_day: list[int] = Field(alias="bymonthday", default_factory=list)
    """Days of the month between 1 to 31, or negative from the end of the month."""

    by_year_day: list[int] = Field(alias="byyearday", default_factory=list)
    """Days of the year between 1 and 366, or negative from the end of the year."""

    by_week_no: list[int] = Field(alias="byweekno", default_factory=list)
    """Week numbers of the year between 1 and 53."""

    by_weekday: list[WeekdayValue] = Field(alias="byday", default_factory=list)
    """Days of the week with an optional occurrence."""

    by_hour: list[int] = Field(alias="byhour", default_factory=list)

    by_minute: list[int] = Field(alias="byminute", default_factory=list)

    by_second: list[int] = Field(alias="bysecond", default_factory=list)

    by_easter: list[int] = Field(alias="byeaster", default_factory=list)
    """Offsets in days from Easter Sunday, a dateutil extension."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )

    def as_rrule(
        self, dtstart: datetime.datetime | None = None
    ) -> rrule.rrule:
        """Create a dateutil rrule for the recurrence.

        The dtstart overrides the start of the recurrence carried in the rule.
        When neither is set the rule starts at the current time in UTC.
        """
        if dtstart is None:
            dtstart = self.dtstart
        if dtstart is None:
            dtstart = dtstart_factory()
        if self.interval < 0:
            raise RecurrenceError(
                f"Unable to create recurrence rule ({self.as_rrule_str()}): "
                "interval must be positive"
            )
        byweekday: list[rrule.weekday] | None = None
        if self.by_weekday:
            byweekday = [
                RRULE_WEEKDAY[value.weekday](value.occurrence or None)
                for value in self.by_weekday
            ]
        try:
            return rrule.rrule(
                freq=RRULE_FREQ[self.freq],
                dtstart=dtstart,
                interval=self.interval or 1,
                wkst=RRULE_WEEKDAY[self.wkst.weekday],
                count=self.count or None,
                until=self.until,
                bysetpos=self.by_setpos or None,
                bymonth=self.by_month or None,
                bymonthday=self.by_month_day or None,
                byyearday=self.by_year_day or None,
                byeaster=self.by_easter or None,
                byweekno=self.by_week_no or None,
                byweekday=byweekday,
                byhour=self.by_hour or None,
                byminute=self.by_minute or None,
                bysecond=self.by_second or None,
                cache=True,
            )
        except ValueError as err:
            raise RecurrenceError(
                f"Unable to create recurrence rule ({self.as_rrule_str()}): {err}"
            ) from err

    def as_rrule_str(self) -> str:
        """Return the Recur instance as an RRULE string.

        The rule parts are always emitted in the same order and parts with
        default values are left out.
        """
        result = [f"FREQ={self.freq}"]
        if self.dtstart is not None:
            result.append(f"DTSTART={encode_date_time(self.dtstart)}")
        if self.interval:
            result.append(f"INTERVAL={self.interval}")
        if self.wkst != DEFAULT_WKST:
            result.append(f"WKST={self.wkst}")
        if self.count:
            result.append(f"COUNT={self.count}")
        if self.until is not None:
            result.append(f"UNTIL={encode_date_time(self.until)}")
        for key, field in _INT_LIST_PARTS_BEFORE_BYDAY:
            if values := getattr(self, field):
                result.append(f"{key}={encode_int_list(values)}")
        if self.by_weekday:
            result.append(f"BYDAY={','.join(str(value) for value in self.by_weekday)}")
        for key, field in _INT_LIST_PARTS_AFTER_BYDAY:
            if values := getattr(self, field):
                result.append(f"{key}={encode_int_list(values)}")
        return ";".join(result)

    def __str__(self) -> str:
        """Return the Recur instance as an RRULE string."""
        return self.as_rrule_str()

    @classmethod
    def from_rrule(
        cls, rrule_str: str, tzinfo: datetime.tzinfo = datetime.timezone.utc
    ) -> Recur:
        """Create a Recur object from an RRULE string.

        An input rule like 'FREQ=YEARLY;BYMONTH=4' is decoded one part at a
        time and the first error aborts the whole rule. A key that appears
        more than once keeps its last value unless duplicate keys are being
        rejected. The tzinfo is the reference timezone for DTSTART and UNTIL
        values without a UTC marker.
        """
        reject_duplicates = duplicate_compat.is_reject_duplicate_keys_enabled()
        result: dict[str, Any] = {}
        for key, value in parse_rule_parts(rrule_str):
            if (decoder := _PART_DECODERS.get(key)) is None:
                raise UnknownPropertyError(key)
            field, decode = decoder
            if reject_duplicates and field in result:
                raise DuplicatePropertyError(key)
            result[field] = decode(value, tzinfo)
        if "freq" not in result:
            raise MissingValueError("FREQ")
        _LOGGER.debug("Recur.from_rrule returned %s", result)
        return cls.model_validate(result)


def rrule_from_str(
    rrule_str: str, tzinfo: datetime.tzinfo = datetime.timezone.utc
) -> rrule.rrule:
    """Create a dateutil rrule directly from an RRULE string."""
    return Recur.from_rrule(rrule_str, tzinfo).as_rrule()
