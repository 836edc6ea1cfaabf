"""Timezone normalization for timestamps read back from storage.

Some providers return naive datetimes for values written as UTC-aware.
Everything in this package compares in UTC.
"""

from datetime import UTC, datetime


def as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
