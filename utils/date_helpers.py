from datetime import date, datetime, timezone
import calendar
from utils.constants import MONTH_FORMAT


def today() -> date:
    return date.today()


def parse_date(date_str: str) -> date | None:
    """Parse a date string in YYYY-MM-DD format, returning None on failure.

    Full ISO timestamps (``2024-01-31T23:00:00-05:00``, trailing ``Z``)
    are accepted; values with an offset are converted to UTC first.
    """
    if not date_str:
        return None
    date_str = date_str.strip()
    if date_str.endswith(("Z", "z")):
        date_str = date_str[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(date_str)
    except ValueError:
        parsed = None
    if parsed is not None:
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc)
        return parsed.date()
    for fmt in ("%Y/%m/%d", "%Y.%m.%d"):
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue
    return None


def to_day(value) -> date:
    """Normalize a date, datetime or ISO string to a calendar date.

    Aware datetimes are converted to UTC first. Raises ValueError for
    anything that is not a valid date.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        parsed = parse_date(value)
        if parsed is not None:
            return parsed
    raise ValueError(f"Invalid date: {value!r}")


def format_month(d: date) -> str:
    return d.strftime(MONTH_FORMAT)


def parse_month(month_str: str) -> date | None:
    """Return the first day of the given YYYY-MM month string."""
    if not month_str:
        return None
    try:
        return datetime.strptime(month_str, MONTH_FORMAT).date()
    except ValueError:
        return None


def clamp_day_to_month(year: int, month: int, day: int) -> int:
    """Clamp day to valid range for the given year/month."""
    max_day = calendar.monthrange(year, month)[1]
    return min(day, max_day)


def add_months(d: date, n: int) -> date:
    """Add n months to date d, clamping day to month end."""
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = clamp_day_to_month(year, month, d.day)
    return d.replace(year=year, month=month, day=day)


def month_index(d: date) -> int:
    """Months since year 0, so two dates subtract to a month distance."""
    return d.year * 12 + d.month - 1


def first_of_month(d: date) -> date:
    return d.replace(day=1)


def last_of_month(d: date) -> date:
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def first_of_quarter(d: date) -> date:
    return date(d.year, (d.month - 1) // 3 * 3 + 1, 1)


def last_of_quarter(d: date) -> date:
    return last_of_month(add_months(first_of_quarter(d), 2))


def first_of_year(d: date) -> date:
    return date(d.year, 1, 1)


def last_of_year(d: date) -> date:
    return date(d.year, 12, 31)


def month_range(month_str: str) -> tuple[date, date]:
    """Return (first_day, last_day) for a YYYY-MM month."""
    d = parse_month(month_str)
    if d is None:
        raise ValueError(f"Invalid month: {month_str}")
    return d, last_of_month(d)


def friendly_month(month_str: str) -> str:
    """Convert YYYY-MM to e.g. 'February 2026'."""
    d = parse_month(month_str)
    if d is None:
        return month_str
    return d.strftime("%B %Y")
