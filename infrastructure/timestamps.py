from datetime import datetime, timezone


def to_naive_utc(value: datetime) -> datetime:
    """SQLite y DateTime sin zona guardan datetimes naive: se guardan en UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def as_utc(value: datetime) -> datetime:
    """Reasigna UTC a un datetime leído de la BDD."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
