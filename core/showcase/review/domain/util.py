"""Helpers and utilities."""

from typing import Any, List, Callable, Iterable
from datetime import datetime
from pytz import UTC


def get_tzaware_utc_now() -> datetime:
    """Generate a datetime for the current moment in UTC."""
    return datetime.now(UTC)


def list_coerce(factory: Callable[..., Any], data: Iterable) -> List[Any]:
    return [factory(**value) if isinstance(value, dict) else value
            for value in data]
