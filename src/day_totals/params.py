# params.py
import datetime
import logging
from dataclasses import dataclass
from typing import Optional

from .dateutils import (
    check_lookback,
    resolve_date,
    resolve_history_count,
    resolve_initial_date,
    resolve_max_days,
    resolve_window_size,
)
from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedParameters:
    date: datetime.date
    reset_date: Optional[datetime.date]
    window_size: int
    history_count: int
    max_days: Optional[int] = None
    lower_inclusive: bool = True


def resolve_parameters(
    date: Optional[str] = None,
    from_date: Optional[str] = None,
    reset: Optional[str] = None,
    window: Optional[int] = None,
    history: Optional[int] = None,
    max_days: Optional[int] = None,
    lower_inclusive: bool = True,
    today: Optional[datetime.date] = None,
) -> ResolvedParameters:
    """
    Resolve the optional, possibly year-less inputs into a validated configuration.

    `from_date` and `window` describe the same quantity and cannot both be given.
    `today` defaults to the current local date.
    """
    if from_date is not None and window is not None:
        raise InvalidArgumentError("Give either a window size or an initial date, not both")

    now = today or datetime.date.today()
    end_date = resolve_date(date, now)
    initial_date = resolve_initial_date(from_date, end_date)
    reset_date = resolve_initial_date(reset, end_date)
    window_size = resolve_window_size(window, initial_date, end_date)
    history_count = resolve_history_count(history, window_size)
    check_lookback(end_date, window_size, history_count)

    params = ResolvedParameters(
        date=end_date,
        reset_date=reset_date,
        window_size=window_size,
        history_count=history_count,
        max_days=resolve_max_days(max_days),
        lower_inclusive=lower_inclusive,
    )
    logger.debug("Resolved parameters: %s", params)
    return params
