"""Human-readable "time since" phrases for the timeSinceConnected variable."""

from __future__ import annotations

from datetime import UTC, datetime

FALLBACK_PHRASE = "a while"


def _to_datetime(value: datetime | str | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


def format_time_since(value: datetime | str | None, now: datetime | None = None) -> str:
    """Describe how long ago *value* was, e.g. ``"6 months"`` or ``"2 years"``.

    Missing or unparseable timestamps give ``"a while"``.
    """
    then = _to_datetime(value)
    if then is None:
        return FALLBACK_PHRASE

    current = _to_datetime(now) or datetime.now(UTC)
    days = (current - then).days

    if days < 30:
        return "a few weeks"
    if days < 60:
        return "about a month"
    if days < 365:
        months = days // 30
        return f"{months} month{'s' if months > 1 else ''}"
    years = days // 365
    return f"{years} year{'s' if years > 1 else ''}"
