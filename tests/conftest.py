"""Test fixtures."""

import datetime
from collections.abc import Generator
from unittest.mock import patch

import pytest

FAKE_NOW = datetime.datetime(2025, 1, 1, 0, 0, 0, tzinfo=datetime.timezone.utc)


@pytest.fixture(autouse=True)
def mock_dtstart() -> Generator[None, None, None]:
    """Mock out the start of rules that do not have a DTSTART."""
    with patch("icalrecur.types.recur.dtstart_factory", return_value=FAKE_NOW):
        yield
