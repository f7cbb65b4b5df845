# dateutils.py
import datetime
import re
from typing import Optional, Tuple

from .config import MAX_SPAN_DAYS
from .errors import DateFormatError, InvalidArgumentError

ONE_DAY = datetime.timedelta(days=1)

_RX_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_RX_MONTH_DAY = re.compile(r"^(\d{2})-(\d{2})$")

# any leap year, so that 02-29 is accepted as a month-day
_LEAP_YEAR = 2000


# ----------------------------------------------------------------
# Parsing helpers
# ----------------------------------------------------------------
def parse_iso_date(text: str) -> Optional[datetime.date]:
    """
    Parse a strict YYYY-MM-DD date.
    Returns None if the text is not in that form or names an impossible date.
    """
    m = _RX_ISO_DATE.match(text.strip())
    if not m:
        return None
    year, month, day = (int(g) for g in m.groups())
    try:
        return datetime.date(year, month, day)
    except ValueError:
        return None


def parse_month_day(text: str) -> Optional[Tuple[int, int]]:
    """Parse an MM-DD month-day. Returns (month, day) or None."""
    m = _RX_MONTH_DAY.match(text.strip())
    if not m:
        return None
    month, day = int(m.group(1)), int(m.group(2))
    try:
        datetime.date(_LEAP_YEAR, month, day)
    except ValueError:
        return None
    return month, day


def _date_in_year(year: int, month_day: Tuple[int, int], text: str) -> datetime.date:
    month, day = month_day
    if year < datetime.MINYEAR:
        raise InvalidArgumentError(f"{text!r} would fall before year {datetime.MINYEAR}")
    try:
        return datetime.date(year, month, day)
    except ValueError as e:
        raise DateFormatError(f"{text!r} does not exist in {year}") from e


def one_year_before(day: datetime.date) -> datetime.date:
    """Same month-day one year earlier; Feb 29 falls back to Feb 28."""
    if day.year <= datetime.MINYEAR:
        raise InvalidArgumentError(f"No date one year before {day}")
    try:
        return day.replace(year=day.year - 1)
    except ValueError:
        return day.replace(year=day.year - 1, day=28)


# ----------------------------------------------------------------
# Resolution
# ----------------------------------------------------------------
def resolve_date(text: Optional[str], now: datetime.date) -> datetime.date:
    """
    Resolve the end date.
      None        -> now
      YYYY-MM-DD  -> that date
      MM-DD       -> that month-day in now's year
    """
    if text is None:
        return now
    full = parse_iso_date(text)
    if full is not None:
        return full
    month_day = parse_month_day(text)
    if month_day is None:
        raise DateFormatError(f"Invalid date {text!r}; expected YYYY-MM-DD or MM-DD")
    return _date_in_year(now.year, month_day, text)


def resolve_initial_date(text: Optional[str], resolved_date: datetime.date) -> Optional[datetime.date]:
    """
    Resolve an initial (or reset) date relative to the resolved end date.

    A month-day without a year resolves to its most recent occurrence on or
    before `resolved_date`:
      resolved_date=2019-02-03, "03-06" -> 2018-03-06
      resolved_date=2019-02-03, "01-01" -> 2019-01-01
    """
    if text is None:
        return None
    full = parse_iso_date(text)
    if full is not None:
        return full
    month_day = parse_month_day(text)
    if month_day is None:
        raise DateFormatError(f"Invalid date {text!r}; expected YYYY-MM-DD or MM-DD")
    year = resolved_date.year
    if month_day > (resolved_date.month, resolved_date.day):
        year -= 1
    return _date_in_year(year, month_day, text)


def _check_span(name: str, value: int) -> int:
    if value > MAX_SPAN_DAYS:
        raise InvalidArgumentError(f"{name} {value} exceeds the limit of {MAX_SPAN_DAYS} days")
    return value


def resolve_window_size(
    explicit: Optional[int],
    initial_date: Optional[datetime.date],
    resolved_date: datetime.date,
) -> int:
    """
    Number of days back included in each total.
    Explicit value wins; otherwise the days between the initial date
    (default: one year before) and the resolved date.
    """
    if explicit is not None:
        if explicit < 0:
            raise InvalidArgumentError(f"Window size cannot be negative: {explicit}")
        return _check_span("Window size", explicit)

    initial = initial_date if initial_date is not None else one_year_before(resolved_date)
    if initial > resolved_date:
        raise InvalidArgumentError(f"Initial date {initial} cannot be after date {resolved_date}")
    return _check_span("Window size", (resolved_date - initial).days)


def resolve_history_count(explicit: Optional[int], window_size: int) -> int:
    """Number of day totals to produce; defaults to the window size."""
    if explicit is None:
        return window_size
    return _check_span("History count", explicit)


def resolve_max_days(explicit: Optional[int]) -> Optional[int]:
    if explicit is not None and explicit < 0:
        raise InvalidArgumentError(f"Maximum days cannot be negative: {explicit}")
    return explicit


def check_lookback(end_date: datetime.date, window_size: int, history_count: int) -> None:
    """
    Reject windows reaching back before the first representable date.
    The oldest day read is `history_count - 1 + max(window_size, 1) - 1`
    days before `end_date`.
    """
    if history_count <= 0:
        return
    lookback = history_count - 1 + max(window_size, 1) - 1
    if lookback > (end_date - datetime.date.min).days:
        raise InvalidArgumentError(
            f"Window of {window_size} days over {history_count} days reaches before {datetime.date.min}"
        )
