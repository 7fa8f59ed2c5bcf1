"""Date-time helpers shared by link codes and student records."""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Return the current UTC time as a naive timestamp, matching stored columns."""

    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Normalize an aware timestamp to naive UTC; naive values are assumed UTC."""

    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def is_expired(expired_at: datetime, now: datetime | None = None) -> bool:
    """Return True once ``now`` has reached ``expired_at``."""

    current = to_naive_utc(now) if now else utc_now()
    return current >= to_naive_utc(expired_at)


def get_age(birthday: date | str, today: date | None = None) -> int:
    """Return the age in whole years for a birthday (date or ISO string)."""

    if isinstance(birthday, str):
        try:
            birthday = date.fromisoformat(birthday[:10])
        except ValueError as exc:
            raise ValueError("Invalid birthday format. Please provide a valid ISO string date.") from exc
    today = today or utc_now().date()
    years = today.year - birthday.year
    if (today.month, today.day) < (birthday.month, birthday.day):
        years -= 1
    return years
