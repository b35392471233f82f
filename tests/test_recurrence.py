"""Tests for parsing a recurrence set from content lines."""

from __future__ import annotations

import datetime
import zoneinfo

import pytest

from icalrecur.exceptions import (
    DateTimeFormatError,
    EmptyInputError,
    MalformedLineError,
    RecurParseError,
    RecurrenceError,
    RecurrenceSetParseError,
    UnknownPropertyError,
    UnsupportedParameterError,
    UnsupportedPropertyError,
)
from icalrecur.iter import RuleSet
from icalrecur.recurrence import (
    RecurrenceContainer,
    encode_recurrences,
    parse_recurrences,
    parse_recurrences_str,
)
from icalrecur.types.recur import Frequency, Recur

UTC = datetime.timezone.utc
NEW_YORK = zoneinfo.ZoneInfo("America/New_York")


class FakeContainer(RecurrenceContainer):
    """Container under test that records the values it was given."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Recur | datetime.datetime]] = []

    def rrule(self, recur: Recur) -> None:
        self.calls.append(("rrule", recur))

    def exrule(self, recur: Recur) -> None:
        self.calls.append(("exrule", recur))

    def rdate(self, value: datetime.datetime) -> None:
        self.calls.append(("rdate", value))

    def exdate(self, value: datetime.datetime) -> None:
        self.calls.append(("exdate", value))

    def recurrence(self) -> list[str]:
        return [f"{name}:{value}" for name, value in self.calls]


def test_set_ordering() -> None:
    """Test values are added in the order they appear."""
    container = parse_recurrences(
        [
            "RRULE:FREQ=DAILY;COUNT=5",
            "EXDATE:20250101T000000Z,20250102T000000Z",
        ],
        container=FakeContainer(),
    )
    assert container.calls == [
        ("rrule", Recur(freq=Frequency.DAILY, count=5)),
        ("exdate", datetime.datetime(2025, 1, 1, tzinfo=UTC)),
        ("exdate", datetime.datetime(2025, 1, 2, tzinfo=UTC)),
    ]


def test_all_properties() -> None:
    """Test each property is added to its own collection."""
    container = parse_recurrences(
        [
            "EXDATE:20250103T090000Z",
            "RDATE;VALUE=DATE-TIME:20250110T090000Z,20250111T090000Z",
            "EXRULE:FREQ=WEEKLY;COUNT=2",
            "RRULE:FREQ=DAILY;COUNT=3",
        ],
        container=FakeContainer(),
    )
    assert [name for name, _ in container.calls] == [
        "exdate",
        "rdate",
        "rdate",
        "exrule",
        "rrule",
    ]


def test_default_container() -> None:
    """Test the lines are parsed into a RuleSet by default."""
    rule_set = parse_recurrences(
        [
            "RRULE:FREQ=DAILY;DTSTART=20250101T090000Z;COUNT=3",
            "EXDATE:20250102T090000Z",
            "RDATE:20250110T090000Z",
        ]
    )
    assert isinstance(rule_set, RuleSet)
    assert list(rule_set) == [
        datetime.datetime(2025, 1, 1, 9, tzinfo=UTC),
        datetime.datetime(2025, 1, 3, 9, tzinfo=UTC),
        datetime.datetime(2025, 1, 10, 9, tzinfo=UTC),
    ]


def test_lines_are_normalized() -> None:
    """Test lines are trimmed and upper cased and blank lines skipped."""
    rule_set = parse_recurrences(
        [
            "",
            "  rrule:freq=weekly;count=2;byday=+1tu  ",
            "   ",
            "exdate:20250101t000000z",
        ]
    )
    assert [str(recur) for recur in rule_set.rrules] == [
        "FREQ=WEEKLY;COUNT=2;BYDAY=+1TU"
    ]
    assert rule_set.exdates == [datetime.datetime(2025, 1, 1, tzinfo=UTC)]


def test_reference_timezone() -> None:
    """Test the reference timezone is used for rules and dates."""
    rule_set = parse_recurrences(
        [
            "RRULE:FREQ=DAILY;DTSTART=20250101T090000;COUNT=1",
            "RDATE:20250105T090000,20250106",
        ],
        tzinfo=NEW_YORK,
    )
    assert rule_set.rrules[0].dtstart == datetime.datetime(
        2025, 1, 1, 9, tzinfo=NEW_YORK
    )
    assert rule_set.rdates == [
        datetime.datetime(2025, 1, 5, 9, tzinfo=NEW_YORK),
        datetime.datetime(2025, 1, 6, tzinfo=NEW_YORK),
    ]


def test_rdate_defaults_to_utc() -> None:
    """Test dates without a UTC marker are read as UTC by default."""
    rule_set = parse_recurrences(["RDATE:20250105T090000"])
    assert rule_set.rdates == [datetime.datetime(2025, 1, 5, 9, tzinfo=UTC)]


@pytest.mark.parametrize("line", ["RRULE FREQ=DAILY", "RRULE"])
def test_malformed_line(line: str) -> None:
    """Test a line without a property name separator."""
    with pytest.raises(MalformedLineError):
        parse_recurrences([line])


@pytest.mark.parametrize(
    ("line", "name"),
    [
        ("DTSTART:20250101T000000Z", "DTSTART"),
        ("RRULES:FREQ=DAILY", "RRULES"),
        (":FREQ=DAILY", ""),
    ],
)
def test_unsupported_property(line: str, name: str) -> None:
    """Test properties other than the recurrence properties are rejected."""
    with pytest.raises(UnsupportedPropertyError) as exc_info:
        parse_recurrences([line])
    assert exc_info.value.name == name


@pytest.mark.parametrize(
    ("line", "cause"),
    [
        ("RRULE:", EmptyInputError),
        ("RRULE:FREQ=DAILY;BOGUS=1", UnknownPropertyError),
        ("EXRULE:FREQ=DAILY;UNTIL=2025", DateTimeFormatError),
        ("EXDATE;VALUE=DATE:20250101", UnsupportedParameterError),
        ("RDATE:20250101T000000Z,BOGUS", DateTimeFormatError),
        ("RDATE;VALUE=DATE-TIME:20250101:20250102", MalformedLineError),
    ],
)
def test_invalid_value(line: str, cause: type[RecurParseError]) -> None:
    """Test errors in a value are raised with the line and original error."""
    with pytest.raises(RecurrenceSetParseError) as exc_info:
        parse_recurrences(["RRULE:FREQ=DAILY", line])
    assert exc_info.value.line == line
    assert isinstance(exc_info.value.__cause__, cause)
    assert exc_info.value.detailed_error == str(exc_info.value.__cause__)


def test_invalid_value_adds_nothing() -> None:
    """Test a failure in a later line leaves the container untouched."""
    container = FakeContainer()
    with pytest.raises(RecurrenceSetParseError):
        parse_recurrences(
            [
                "RRULE:FREQ=DAILY;COUNT=5",
                "EXDATE:20250101T000000Z,20250102",
                "EXDATE:bogus",
            ],
            container=container,
        )
    assert container.calls == []


def test_invalid_rule_construction() -> None:
    """Test a rule rejected by dateutil fails the set."""
    with pytest.raises(RecurrenceSetParseError) as exc_info:
        parse_recurrences(["RRULE:FREQ=DAILY;BYSETPOS=0"])
    assert exc_info.value.line == "RRULE:FREQ=DAILY;BYSETPOS=0"
    assert isinstance(exc_info.value.__cause__, RecurrenceError)


def test_parse_str() -> None:
    """Test parsing a newline separated block of lines."""
    rule_set = parse_recurrences_str(
        """
        RRULE:FREQ=DAILY;COUNT=5

        EXDATE:20250101T000000Z,20250102T000000Z
        """
    )
    assert len(rule_set.rrules) == 1
    assert rule_set.exdates == [
        datetime.datetime(2025, 1, 1, tzinfo=UTC),
        datetime.datetime(2025, 1, 2, tzinfo=UTC),
    ]


def test_parse_str_container() -> None:
    """Test parsing a block of lines into a supplied container."""
    container = parse_recurrences_str(
        "RDATE:20250101T000000Z", container=FakeContainer()
    )
    assert container.calls == [("rdate", datetime.datetime(2025, 1, 1, tzinfo=UTC))]


@pytest.mark.parametrize("value", ["", "  ", "\n\n"])
def test_parse_str_empty(value: str) -> None:
    """Test a blank block of lines."""
    with pytest.raises(EmptyInputError):
        parse_recurrences_str(value)


def test_encode() -> None:
    """Test encoding the set as content lines."""
    rule_set = parse_recurrences(
        [
            "EXDATE:20250101T000000Z,20250102T000000Z",
            "RRULE:COUNT=5;FREQ=DAILY",
        ]
    )
    assert encode_recurrences(rule_set) == "\n".join(
        [
            "RRULE:FREQ=DAILY;COUNT=5",
            "EXDATE:20250101T000000Z",
            "EXDATE:20250102T000000Z",
        ]
    )


def test_encode_round_trip() -> None:
    """Test the encoded set parses back to the same values."""
    rule_set = parse_recurrences(
        [
            "RRULE:FREQ=MONTHLY;DTSTART=20250101T090000;BYDAY=-1FR;COUNT=2",
            "EXRULE:FREQ=YEARLY;DTSTART=20250131T090000;COUNT=1",
            "RDATE:20250215",
            "EXDATE:20250131T090000",
        ],
        tzinfo=NEW_YORK,
    )
    encoded = encode_recurrences(rule_set)
    new_rule_set = parse_recurrences_str(encoded)
    assert new_rule_set.rrules == rule_set.rrules
    assert new_rule_set.exrules == rule_set.exrules
    assert new_rule_set.rdates == rule_set.rdates
    assert new_rule_set.exdates == rule_set.exdates
    assert encode_recurrences(new_rule_set) == encoded
    assert list(new_rule_set) == list(rule_set)


def test_negative_interval() -> None:
    """Test a rule with a negative interval fails the set before expansion."""
    with pytest.raises(RecurrenceSetParseError) as exc_info:
        parse_recurrences_str(
            "RRULE:FREQ=DAILY;DTSTART=20250101T000000Z;INTERVAL=-1;COUNT=2"
        )
    assert isinstance(exc_info.value.__cause__, RecurrenceError)
