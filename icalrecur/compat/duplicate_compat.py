"""Parsing mode for rejecting repeated keys in a recurrence rule."""

import contextlib
import contextvars
from collections.abc import Generator


_reject_duplicate_keys = contextvars.ContextVar("reject_duplicate_keys", default=False)


@contextlib.contextmanager
def enable_reject_duplicate_keys() -> Generator[None]:
    """Context manager to fail parsing rules that repeat a key."""
    token = _reject_duplicate_keys.set(True)
    try:
        yield
    finally:
        _reject_duplicate_keys.reset(token)


def is_reject_duplicate_keys_enabled() -> bool:
    """Check if repeated keys are rejected."""
    return _reject_duplicate_keys.get()
