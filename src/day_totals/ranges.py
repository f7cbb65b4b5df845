# ranges.py
import datetime
import logging
import sys
from dataclasses import dataclass
from typing import Iterable, Iterator, Set

from .config import DEFAULT_DELIMITER
from .dateutils import parse_iso_date
from .errors import InvalidArgumentError, MalformedInputError

logger = logging.getLogger(__name__)


# -------------------------------
# Data model
# -------------------------------
@dataclass(frozen=True)
class Range:
    """Inclusive date interval [lower, upper]."""
    lower: datetime.date
    upper: datetime.date

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise InvalidArgumentError(f"Range lower bound {self.lower} is after upper bound {self.upper}")

    def days(self) -> Iterator[datetime.date]:
        for offset in range(len(self)):
            yield self.lower + datetime.timedelta(days=offset)

    def __len__(self) -> int:
        return (self.upper - self.lower).days + 1


# -------------------------------
# Parsing
# -------------------------------
def parse_range_line(line: str, line_number: int, delimiter: str = DEFAULT_DELIMITER) -> Range:
    """
    Parse a single `lower,upper` line into a Range.
    Raises MalformedInputError naming `line_number` on any problem.
    """
    text = line.rstrip("\r\n")
    fields = text.split(delimiter)
    if len(fields) != 2:
        raise MalformedInputError(f"expected two components: {text!r}", line_number)

    bounds = []
    for field in fields:
        day = parse_iso_date(field)
        if day is None:
            raise MalformedInputError(f"invalid date {field.strip()!r}: {text!r}", line_number)
        bounds.append(day)

    lower, upper = bounds
    if lower > upper:
        raise MalformedInputError(f"range ends before it starts: {text!r}", line_number)
    return Range(lower, upper)


def read_ranges(lines: Iterable[str], delimiter: str = DEFAULT_DELIMITER) -> Set[Range]:
    """Parse every line; identical ranges collapse into one."""
    ranges: Set[Range] = set()
    line_count = 0
    for line_count, line in enumerate(lines, start=1):
        if line_count == 1:
            line = line.lstrip("\ufeff")
        ranges.add(parse_range_line(line, line_count, delimiter))
    if len(ranges) < line_count:
        logger.debug("Dropped %d duplicate range(s)", line_count - len(ranges))
    return ranges


def load_ranges(path: str, delimiter: str = DEFAULT_DELIMITER) -> Set[Range]:
    """
    Load ranges from a file; `-` reads standard input.
    A leading byte-order mark is ignored.
    """
    if path == "-":
        return read_ranges(sys.stdin, delimiter)
    with open(path, "r", encoding="utf-8-sig") as f:
        ranges = read_ranges(f, delimiter)
    logger.debug("Loaded %d range(s) from %s", len(ranges), path)
    return ranges
