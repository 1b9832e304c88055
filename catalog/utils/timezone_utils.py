from __future__ import annotations

from datetime import datetime, timezone as dt_timezone


class TimezoneUtils:
    """UTC helpers shared by models and the custom ID engine."""

    @staticmethod
    def utc_now() -> datetime:
        """Return the current UTC timestamp (timezone aware)."""
        return datetime.now(dt_timezone.utc)

    @staticmethod
    def ensure_timezone_aware(
        dt: datetime | None, assume_utc: bool = True
    ) -> datetime | None:
        """Guarantee that a datetime carries timezone information."""
        if dt is None:
            return None
        if dt.tzinfo is None:
            if not assume_utc:
                raise ValueError("Naive datetime provided without explicit timezone handling.")
            return dt.replace(tzinfo=dt_timezone.utc)
        return dt

    @staticmethod
    def to_api_timestamp(dt: datetime | None) -> str | None:
        """ISO-8601 UTC string for JSON payloads; SQLite hands back naive values."""
        aware = TimezoneUtils.ensure_timezone_aware(dt)
        return aware.astimezone(dt_timezone.utc).isoformat() if aware else None
