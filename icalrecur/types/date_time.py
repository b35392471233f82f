"""Library for parsing and encoding DATE and DATE-TIME values in recurrences.

Three textual shapes are allowed for date/time values and they are told
apart by their length alone:

  20250615          DATE, midnight in the reference timezone
  20250615T093000   local DATE-TIME, interpreted in the reference timezone
  20250615T093000Z  UTC DATE-TIME, the reference timezone is ignored

Values are always encoded in the UTC form.
"""

from __future__ import annotations

import datetime
import logging
import re

from icalrecur.exceptions import (
    DateTimeFormatError,
    MalformedLineError,
    UnsupportedParameterError,
)

_LOGGER = logging.getLogger(__name__)

DATE_REGEX = re.compile(r"^([0-9]{8})$")
LOCAL_DATETIME_REGEX = re.compile(r"^([0-9]{8})T([0-9]{6})$")
DATETIME_REGEX = re.compile(r"^([0-9]{8})T([0-9]{6})Z$")

DATE_LENGTH = 8
LOCAL_DATETIME_LENGTH = 15

VALUE_DATE_TIME = "VALUE=DATE-TIME"


def parse_date_time(
    value: str, tzinfo: datetime.tzinfo = datetime.timezone.utc
) -> datetime.datetime:
    """Parse a rfc5545 DATE or DATE-TIME into a timezone aware datetime.

    The tzinfo is the reference timezone used for values that carry no
    timezone marker of their own.
    """
    if len(value) == DATE_LENGTH:
        regex, timezone = DATE_REGEX, tzinfo
    elif len(value) == LOCAL_DATETIME_LENGTH:
        regex, timezone = LOCAL_DATETIME_REGEX, tzinfo
    else:
        regex, timezone = DATETIME_REGEX, datetime.timezone.utc
    if not (match := regex.fullmatch(value)):
        raise DateTimeFormatError(
            f"Expected value to match {regex.pattern} pattern: '{value}'",
            value=value,
        )

    date_value = match.group(1)
    time_value = match.group(2) if regex.groups > 1 else "000000"
    try:
        result = datetime.datetime(
            int(date_value[0:4]),
            int(date_value[4:6]),
            int(date_value[6:]),
            int(time_value[0:2]),
            int(time_value[2:4]),
            int(time_value[4:6]),
            tzinfo=timezone,
        )
    except ValueError as err:
        raise DateTimeFormatError(
            f"Invalid date/time value '{value}': {err}", value=value
        ) from err
    _LOGGER.debug("parse_date_time returned %s", result)
    return result


def encode_date_time(value: datetime.datetime) -> str:
    """Encode a datetime in the UTC DATE-TIME form.

    A naive datetime is treated as already being in UTC. Microseconds are
    dropped.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    value = value.astimezone(datetime.timezone.utc)
    return (
        f"{value.year:04d}{value.month:02d}{value.day:02d}"
        f"T{value.hour:02d}{value.minute:02d}{value.second:02d}Z"
    )


def parse_date_time_list(
    value: str, tzinfo: datetime.tzinfo = datetime.timezone.utc
) -> list[datetime.datetime]:
    """Parse the value of an RDATE or EXDATE property into datetimes.

    The value is a comma separated list of dates, optionally preceded by a
    VALUE=DATE-TIME parameter, for example:

      VALUE=DATE-TIME:20250101T000000Z,20250102T000000Z
    """
    parts = value.split(":")
    if len(parts) > 2:
        raise MalformedLineError(
            f"Expected at most one parameter separator in date list: '{value}'",
            line=value,
        )
    if len(parts) == 2:
        for param in parts[0].split(";"):
            if param != VALUE_DATE_TIME:
                raise UnsupportedParameterError(param)
        value = parts[1]
    return [parse_date_time(date_value, tzinfo) for date_value in value.split(",")]
