from datetime import datetime, timezone


def utcnow() -> datetime:
    # Naive UTC; SQLite drops tzinfo on round-trip and naive values must compare cleanly.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def calendar_days_between(earlier: datetime, later: datetime) -> int:
    return (later.date() - earlier.date()).days
