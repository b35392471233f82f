"""Parsing modes that change how strictly recurrence text is validated.

By default a recurrence rule that repeats a key keeps the last value. The
context managers in this package can be used to opt in to rejecting such
input instead.
"""

from .duplicate_compat import (
    enable_reject_duplicate_keys,
    is_reject_duplicate_keys_enabled,
)

__all__ = [
    "enable_reject_duplicate_keys",
    "is_reject_duplicate_keys_enabled",
]
