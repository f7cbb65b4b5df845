# formatters.py
import datetime
import sys
from dataclasses import dataclass
from typing import IO, Iterable, List, Mapping, Optional


@dataclass(frozen=True)
class DayRow:
    positive: bool
    day: datetime.date
    count: Optional[int]          # None when the date was never touched
    run_total: Optional[int]      # None when no positive run is in progress
    window_total: int
    remaining: Optional[int]      # max_days - window_total, if a maximum is set


def build_rows(
    counts: Mapping[datetime.date, int],
    totals: Mapping[datetime.date, int],
    max_days: Optional[int] = None,
) -> List[DayRow]:
    """
    Turn count and total maps into presentation rows, in `totals` order.
    The run total accumulates consecutive positive-count days and resets
    on any other day.
    """
    rows: List[DayRow] = []
    run_total = 0
    for day, window_total in totals.items():
        count = counts.get(day)
        positive = count is not None and count > 0
        if positive:
            run_total += count
        else:
            run_total = 0
        rows.append(
            DayRow(
                positive=positive,
                day=day,
                count=count,
                run_total=run_total or None,
                window_total=window_total,
                remaining=None if max_days is None else max_days - window_total,
            )
        )
    return rows


def _cell(value: Optional[int]) -> str:
    return "" if value is None else str(value)


def format_row(row: DayRow, separator: str = ",") -> str:
    """
    Render one row:
      *,2013-02-18,1,1,136,44
      ,2013-02-20,,,135,45
    """
    cells = [
        "*" if row.positive else "",
        row.day.isoformat(),
        _cell(row.count),
        _cell(row.run_total),
        str(row.window_total),
    ]
    if row.remaining is not None:
        cells.append(str(row.remaining))
    return separator.join(cells)


def print_rows(rows: Iterable[DayRow], out: Optional[IO[str]] = None) -> None:
    out = out or sys.stdout
    for row in rows:
        print(format_row(row), file=out)
