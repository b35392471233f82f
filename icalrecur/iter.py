"""Library for the recurrence set container used when assembling rules.

A recurrence set is the combination of inclusion rules, exclusion rules,
inclusion dates and exclusion dates. The parser only ever appends to these
collections through the `RecurrenceContainer` interface, so any container
may be supplied. `RuleSet` is the container used by default and is a wrapper
around `dateutil.rrule.rruleset` for expanding the occurrences.
"""

from __future__ import annotations

import contextlib
import datetime
import logging
from abc import ABC, abstractmethod
from collections.abc import Generator, Iterable, Iterator

from dateutil import rrule

from .exceptions import RecurrenceError
from .types.date_time import encode_date_time
from .types.recur import Recur

__all__ = [
    "RecurrenceContainer",
    "RuleSet",
]

_LOGGER = logging.getLogger(__name__)


class RecurrenceContainer(ABC):
    """The set of operations needed to assemble a recurrence set."""

    @abstractmethod
    def rrule(self, recur: Recur) -> None:
        """Append an inclusion rule."""

    @abstractmethod
    def exrule(self, recur: Recur) -> None:
        """Append an exclusion rule."""

    @abstractmethod
    def rdate(self, value: datetime.datetime) -> None:
        """Append an inclusion date."""

    @abstractmethod
    def exdate(self, value: datetime.datetime) -> None:
        """Append an exclusion date."""

    @abstractmethod
    def recurrence(self) -> list[str]:
        """Return the contents of the set as content lines."""


class RuleSet(RecurrenceContainer, Iterable[datetime.datetime]):
    """A recurrence set that expands occurrences with `dateutil.rrule`.

    Rules are converted to a `dateutil.rrule.rrule` as soon as they are
    added so that invalid rules are reported when the set is built rather
    than when it is iterated.
    """

    def __init__(self) -> None:
        """Initialize an empty RuleSet."""
        self._rrule: list[tuple[Recur, rrule.rrule]] = []
        self._exrule: list[tuple[Recur, rrule.rrule]] = []
        self._rdate: list[datetime.datetime] = []
        self._exdate: list[datetime.datetime] = []

    def rrule(self, recur: Recur) -> None:
        """Append an inclusion rule."""
        self._rrule.append((recur, recur.as_rrule()))

    def exrule(self, recur: Recur) -> None:
        """Append an exclusion rule."""
        self._exrule.append((recur, recur.as_rrule()))

    def rdate(self, value: datetime.datetime) -> None:
        """Append an inclusion date."""
        self._rdate.append(value)

    def exdate(self, value: datetime.datetime) -> None:
        """Append an exclusion date."""
        self._exdate.append(value)

    @property
    def rrules(self) -> list[Recur]:
        """Return the inclusion rules in the order they were added."""
        return [recur for recur, _ in self._rrule]

    @property
    def exrules(self) -> list[Recur]:
        """Return the exclusion rules in the order they were added."""
        return [recur for recur, _ in self._exrule]

    @property
    def rdates(self) -> list[datetime.datetime]:
        """Return the inclusion dates in the order they were added."""
        return list(self._rdate)

    @property
    def exdates(self) -> list[datetime.datetime]:
        """Return the exclusion dates in the order they were added."""
        return list(self._exdate)

    def recurrence(self) -> list[str]:
        """Return the contents of the set as content lines."""
        result = [f"RRULE:{recur}" for recur in self.rrules]
        result.extend(f"EXRULE:{recur}" for recur in self.exrules)
        result.extend(f"RDATE:{encode_date_time(value)}" for value in self._rdate)
        result.extend(f"EXDATE:{encode_date_time(value)}" for value in self._exdate)
        return result

    def _ruleset(self) -> rrule.rruleset:
        """Create a dateutil.rruleset."""
        ruleset = rrule.rruleset(cache=True)
        for _, rule in self._rrule:
            ruleset.rrule(rule)
        for _, rule in self._exrule:
            ruleset.exrule(rule)
        for rdate in self._rdate:
            ruleset.rdate(rdate)
        for exdate in self._exdate:
            ruleset.exdate(exdate)
        return ruleset

    @contextlib.contextmanager
    def _evaluate(self) -> Generator[None]:
        """Raise errors from dateutil while expanding the set as a RecurrenceError."""
        try:
            yield
        except (TypeError, ValueError) as err:
            raise RecurrenceError(
                f"Error evaluating recurrence rule ({self!r}): {str(err)}"
            ) from err

    def __iter__(self) -> Iterator[datetime.datetime]:
        """Return an iterator as a traversal over occurrences in chronological order."""
        with self._evaluate():
            yield from self._ruleset()

    def all(self) -> list[datetime.datetime]:
        """Return all occurrences of the set."""
        return list(self)

    def between(
        self,
        after: datetime.datetime,
        before: datetime.datetime,
        inc: bool = False,
    ) -> list[datetime.datetime]:
        """Return the occurrences between after and before."""
        with self._evaluate():
            return list(self._ruleset().between(after, before, inc=inc))

    def after(
        self, value: datetime.datetime, inc: bool = False
    ) -> datetime.datetime | None:
        """Return the first occurrence after the value."""
        with self._evaluate():
            return self._ruleset().after(value, inc=inc)

    def before(
        self, value: datetime.datetime, inc: bool = False
    ) -> datetime.datetime | None:
        """Return the last occurrence before the value."""
        with self._evaluate():
            return self._ruleset().before(value, inc=inc)

    def __str__(self) -> str:
        """Return the set as newline separated content lines."""
        return "\n".join(self.recurrence())

    def __repr__(self) -> str:
        return (
            f"RuleSet(rrule={[str(r) for r in self.rrules]}, "
            f"exrule={[str(r) for r in self.exrules]}, "
            f"rdate={self._rdate}, exdate={self._exdate})"
        )
