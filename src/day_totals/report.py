# report.py
import datetime
import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from .config import DEFAULT_DELIMITER
from .counts import count_days
from .formatters import build_rows
from .params import ResolvedParameters, resolve_parameters
from .ranges import Range, load_ranges
from .totals import compute_day_totals

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------
def _message(level: str, code: str, text: str) -> Dict[str, str]:
    return {"level": level, "code": code, "text": text}


def _collect_messages(
    ranges: Iterable[Range],
    params: ResolvedParameters,
    totals: Dict[datetime.date, int],
) -> List[Dict[str, str]]:
    messages: List[Dict[str, str]] = []
    ranges = list(ranges)

    if not ranges:
        messages.append(_message("info", "no-ranges", "No ranges were given; all totals are 0."))

    late = [r for r in ranges if r.upper > params.date]
    if late:
        messages.append(
            _message(
                "info",
                "ranges-after-date",
                f"{len(late)} range(s) end after {params.date}; later days are not included in any total.",
            )
        )

    if params.max_days is not None:
        for day, total in totals.items():
            if total > params.max_days:
                messages.append(
                    _message(
                        "warning",
                        "over-max",
                        f"Window total {total} on {day} exceeds the maximum of {params.max_days} days.",
                    )
                )
                break
    return messages


# ----------------------------------------------------------------
# Core day totals logic
# ----------------------------------------------------------------
def run_day_totals(
    ranges: Union[str, Iterable[Range]],
    date: Optional[str] = None,
    from_date: Optional[str] = None,
    reset: Optional[str] = None,
    window: Optional[int] = None,
    history: Optional[int] = None,
    max_days: Optional[int] = None,
    lower_inclusive: bool = True,
    today: Optional[datetime.date] = None,
    delimiter: str = DEFAULT_DELIMITER,
) -> Dict[str, Any]:
    """Core day totals logic used by both CLI and Fava extension.

    `ranges` is either a path (`-` for stdin) or an iterable of Range.
    Parameters are resolved before any input is read.
    """
    params = resolve_parameters(
        date=date,
        from_date=from_date,
        reset=reset,
        window=window,
        history=history,
        max_days=max_days,
        lower_inclusive=lower_inclusive,
        today=today,
    )

    if isinstance(ranges, str):
        range_set = load_ranges(ranges, delimiter)
    else:
        range_set = set(ranges)
    logger.debug("Counting days over %d range(s)", len(range_set))

    counts = count_days(range_set, params.lower_inclusive)
    totals = compute_day_totals(
        params.date,
        params.reset_date,
        params.window_size,
        params.history_count,
        counts,
    )
    rows = build_rows(counts, totals, params.max_days)

    return {
        "params": params,
        "counts": counts,
        "totals": totals,
        "rows": rows,
        "messages": _collect_messages(range_set, params, totals),
    }
