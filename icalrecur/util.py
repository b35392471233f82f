"""Utility methods used by multiple components."""

from __future__ import annotations

import datetime

__all__ = [
    "dtstart_factory",
]


def dtstart_factory() -> datetime.datetime:
    """Factory method for the start of rules without a DTSTART to facilitate mocking."""
    return datetime.datetime.now(tz=datetime.timezone.utc).replace(microsecond=0)
