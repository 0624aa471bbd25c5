"""Validation of the optional ``from``/``to`` purchase date window."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone

from purchase_insights.foundation.errors import ValidationError

BOTH_OR_NEITHER = "both or neither"
INVALID_DATE_FORMAT = "invalid date format"
FROM_AFTER_TO = "from after to"


@dataclass(frozen=True)
class DateRange:
    """Closed calendar-date interval; both endpoints are inclusive."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"start ({self.start}) must not be after end ({self.end})")

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def _parse_instant(value: str, name: str) -> datetime:
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValidationError(INVALID_DATE_FORMAT, f"{name}={value!r}") from exc


def _as_utc(moment: datetime) -> datetime:
    # Naive values are read as UTC so they order against aware ones.
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def parse_date_range(
    from_value: str | None, to_value: str | None
) -> DateRange | None:
    """Validate the optional date window of a purchase frequency query.

    Parameters
    ----------
    from_value, to_value:
        ISO 8601 date (``2024-01-31``) or date-time
        (``2024-01-31T09:00:00+09:00``) strings. ``None`` and the empty
        string both mean "not supplied".

    Returns
    -------
    DateRange | None
        ``None`` when neither bound is supplied, otherwise the inclusive
        calendar-date interval. A date-time bound keeps the calendar day at
        its own offset, the same way purchase dates are read.

    Raises
    ------
    ValidationError
        Only one bound is supplied, a bound does not parse, or ``from`` is
        strictly later than ``to``.

    Examples
    --------
    >>> parse_date_range(None, None) is None
    True
    >>> parse_date_range("2024-01-01", "2024-01-31")
    DateRange(start=datetime.date(2024, 1, 1), end=datetime.date(2024, 1, 31))
    """

    has_from = bool(from_value)
    has_to = bool(to_value)
    if has_from != has_to:
        raise ValidationError(BOTH_OR_NEITHER, "from and to must be provided together")
    if not has_from:
        return None

    if not isinstance(from_value, str) or not isinstance(to_value, str):
        raise ValidationError(INVALID_DATE_FORMAT, "dates must be ISO 8601 strings")

    start = _parse_instant(from_value, "from")
    end = _parse_instant(to_value, "to")
    # Calendar dates are taken at each value's own offset, like purchase dates.
    if _as_utc(start) > _as_utc(end) or start.date() > end.date():
        raise ValidationError(FROM_AFTER_TO, f"{from_value} > {to_value}")

    return DateRange(start=start.date(), end=end.date())
