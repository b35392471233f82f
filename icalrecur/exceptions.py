"""Exceptions for icalrecur library."""

from __future__ import annotations


class CalendarError(Exception):
    """Base exception for all icalrecur errors."""


class RecurParseError(CalendarError, ValueError):
    """Exception raised when parsing recurrence text.

    The 'message' attribute contains a human-readable message about the
    error that occurred. The 'detailed_error' attribute can provide additional
    information about the error, such as the error from a lower level parser,
    useful for debugging purposes.
    """

    def __init__(self, message: str, *, detailed_error: str | None = None) -> None:
        """Initialize the RecurParseError with a message."""
        super().__init__(message)
        self.message = message
        self.detailed_error = detailed_error


class EmptyInputError(RecurParseError):
    """Exception raised when decoding blank or whitespace only text."""


class MalformedPropertyError(RecurParseError):
    """Exception raised when a rule part is not a single KEY=VALUE pair."""

    def __init__(self, message: str, *, part: str) -> None:
        super().__init__(message)
        self.part = part


class DuplicatePropertyError(MalformedPropertyError):
    """Exception raised for a repeated key when duplicate keys are rejected."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Recurrence rule property repeated: {key}", part=key)
        self.key = key


class MalformedLineError(RecurParseError):
    """Exception raised when a line has no property name separator."""

    def __init__(self, message: str, *, line: str) -> None:
        super().__init__(message)
        self.line = line


class MissingValueError(RecurParseError):
    """Exception raised when a rule property has an empty value."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Recurrence rule property {key} has no value")
        self.key = key


class UnknownPropertyError(RecurParseError):
    """Exception raised for a rule property key that is not recognized."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Unknown recurrence rule property: {key}")
        self.key = key


class UnsupportedPropertyError(RecurParseError):
    """Exception raised for a content line property that is not a recurrence."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unsupported property: {name}")
        self.name = name


class UnsupportedParameterError(RecurParseError):
    """Exception raised for an RDATE/EXDATE parameter other than VALUE=DATE-TIME."""

    def __init__(self, param: str) -> None:
        super().__init__(f"Unsupported RDATE/EXDATE parameter: {param}")
        self.param = param


class UnknownFrequencyError(RecurParseError):
    """Exception raised for a FREQ value outside the known frequencies."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Undefined frequency: {value}")
        self.value = value


class UnknownWeekdayError(RecurParseError):
    """Exception raised for a weekday that does not end in a known day code."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Undefined weekday: {value}")
        self.value = value


class DateTimeFormatError(RecurParseError):
    """Exception raised when a DATE or DATE-TIME value does not match its shape."""

    def __init__(self, message: str, *, value: str) -> None:
        super().__init__(message)
        self.value = value


class NumericParseError(RecurParseError):
    """Exception raised when an integer value is malformed."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Expected value to be an integer: '{value}'")
        self.value = value


class RecurrenceSetParseError(RecurParseError):
    """Exception raised when a line of a recurrence set fails to parse.

    The underlying error is chained as the cause and the offending content
    line is available in the 'line' attribute.
    """

    def __init__(
        self, message: str, *, line: str, detailed_error: str | None = None
    ) -> None:
        super().__init__(message, detailed_error=detailed_error)
        self.line = line


class RecurrenceError(CalendarError):
    """Exception raised when building or evaluating a recurrence rule.

    Recurrence rules have complex logic and it is common for there to be
    invalid dates or bugs, so this special exception exists to help
    provide additional debug data to find the source of the issue. Often
    `dateutil.rrule` has limitations that are only discovered when the
    rule is constructed or expanded.
    """
