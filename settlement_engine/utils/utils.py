"""Generic helpers shared across layers."""

from datetime import datetime, timezone
from pathlib import Path


def get_project_root() -> Path:
    """Return the repository root directory.

    Returns:
        Path: Directory containing the settlement_engine package.
    """
    return Path(__file__).resolve().parents[2]


def to_naive_utc(value: datetime) -> datetime:
    """Normalize a datetime to naive UTC, the form stored in the database.

    Args:
        value: Naive (assumed UTC) or timezone-aware datetime.

    Returns:
        datetime: Naive datetime expressed in UTC.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def utcnow() -> datetime:
    """Return the current time as naive UTC."""
    return to_naive_utc(datetime.now(timezone.utc))


__all__ = ["get_project_root", "to_naive_utc", "utcnow"]
