"""Datetime helpers."""

from datetime import datetime, UTC


def utc_now():
    """Timezone-aware current time, used for every stored timestamp."""
    return datetime.now(UTC)
