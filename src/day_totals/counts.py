# counts.py
import datetime
from typing import Dict, Iterable

from .ranges import Range

DayCounts = Dict[datetime.date, int]


def count_days(ranges: Iterable[Range], lower_inclusive: bool = True) -> DayCounts:
    """
    Count, for every date touched by a range, how many ranges cover it.

    When `lower_inclusive` is False the lower boundary date of each range is
    registered (with 0 if nothing else covers it) but not incremented, so
    the result tells "touched but not counted" apart from "never touched":
      {[2002-03-02, 2002-03-02]}, lower_inclusive=False -> {2002-03-02: 0}
    """
    counts: DayCounts = {}
    for rng in ranges:
        for day in rng.days():
            current = counts.get(day, 0)
            if day == rng.lower and not lower_inclusive:
                counts[day] = current
            else:
                counts[day] = current + 1
    return counts
