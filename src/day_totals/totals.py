# totals.py
import datetime
import logging
from typing import Dict, Mapping, Optional

from .dateutils import ONE_DAY

logger = logging.getLogger(__name__)

DayTotals = Dict[datetime.date, int]


def _window_floor(
    day: datetime.date,
    reset_date: Optional[datetime.date],
    span: datetime.timedelta,
) -> datetime.date:
    """First date included in the total for `day`."""
    floor = day - (span - ONE_DAY)
    if reset_date is not None and reset_date <= day and reset_date > floor:
        return reset_date
    return floor


def compute_day_totals(
    end_date: datetime.date,
    reset_date: Optional[datetime.date],
    window_size: int,
    history_count: int,
    counts: Mapping[datetime.date, int],
) -> DayTotals:
    """
    Rolling sum of day counts for the `history_count` days ending at `end_date`.

    Each total covers [floor, day] where floor is `day - window_size + 1`,
    pinned to `reset_date` once that date has been reached and is the later
    of the two. A window size of 0 covers the day itself.

    Keys are inserted in ascending date order. The sum is kept incrementally:
    the floor only moves forward, so each date enters and leaves at most once.
    The oldest floor must be a representable date; resolve_parameters checks it.
    """
    totals: DayTotals = {}
    if history_count <= 0:
        return totals

    span = datetime.timedelta(days=max(window_size, 1))
    first = end_date - datetime.timedelta(days=history_count - 1)

    # seed the window for the first output date
    floor = _window_floor(first, reset_date, span)
    total = 0
    for offset in range((first - floor).days + 1):
        total += counts.get(floor + datetime.timedelta(days=offset), 0)
    totals[first] = total

    day = first
    while day < end_date:
        day += ONE_DAY
        total += counts.get(day, 0)
        next_floor = _window_floor(day, reset_date, span)
        while floor < next_floor:
            total -= counts.get(floor, 0)
            floor += ONE_DAY
        totals[day] = total

    logger.debug(
        "Computed %d day totals ending %s (window=%d, reset=%s)",
        len(totals), end_date, window_size, reset_date,
    )
    return totals
