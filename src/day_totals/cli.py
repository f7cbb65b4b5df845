# cli.py
import argparse
import logging
import sys
from typing import Dict, Optional

from .config import DEFAULT_DELIMITER, load_options, parse_flag
from .dateutils import parse_iso_date
from .errors import DayTotalsError, DateFormatError, InvalidArgumentError
from .formatters import print_rows
from .report import run_day_totals


def _int_option(name: str, cli_value: Optional[int], options: Dict[str, str]) -> Optional[int]:
    if cli_value is not None:
        return cli_value
    raw = options.get(name)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise InvalidArgumentError(f"Option {name!r} must be an integer, got {raw!r}") from e


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="day-totals",
        description="Print per-day counts and rolling totals of days covered by date ranges",
    )
    ap.add_argument("ranges", nargs="?", default="-",
                    help="File of 'from,to' date lines (default: read stdin)")
    ap.add_argument("-d", "--date", default=None,
                    help="Last day to report, YYYY-MM-DD or MM-DD (default: today)")
    window = ap.add_mutually_exclusive_group()
    window.add_argument("-f", "--from", dest="from_date", default=None,
                        help="Initial date; sets the window size to the days since it")
    window.add_argument("-w", "--window", type=int, default=None,
                        help="Days back to include in each total (default: one year)")
    ap.add_argument("-r", "--reset", default=None,
                    help="Date at which the rolling total restarts, YYYY-MM-DD or MM-DD")
    ap.add_argument("-x", "--max", dest="max_days", type=int, default=None,
                    help="Maximum allowed days; adds a remaining-days column")
    ap.add_argument("-n", "--history", type=int, default=None,
                    help="Number of day totals to print (default: window size)")
    ap.add_argument("--exclusive", action="store_true",
                    help="Do not count the first day of each range")
    ap.add_argument("--delimiter", default=None,
                    help=f"Field delimiter of range lines (default: '{DEFAULT_DELIMITER}')")
    ap.add_argument("--today", default=None, help="Override today YYYY-MM-DD (optional)")
    ap.add_argument("--config", default=None, help="Path to an options file")
    ap.add_argument("--verbose", action="store_true", help="Log debug details to stderr")
    return ap


# ----------------------------------------------------------------
# CLI entry point
# ----------------------------------------------------------------
def main(argv=None):
    ap = build_parser()
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = load_options(args.config) if args.config else {}

        today = None
        if args.today:
            today = parse_iso_date(args.today)
            if today is None:
                raise DateFormatError(f"Invalid --today {args.today!r}; expected YYYY-MM-DD")

        from_date = args.from_date
        window = args.window
        if from_date is None and window is None:
            from_date = options.get("from")
            window = _int_option("window", None, options)

        data = run_day_totals(
            ranges=args.ranges,
            date=args.date if args.date is not None else options.get("date"),
            from_date=from_date,
            reset=args.reset if args.reset is not None else options.get("reset"),
            window=window,
            history=_int_option("history", args.history, options),
            max_days=_int_option("max", args.max_days, options),
            lower_inclusive=not (args.exclusive or parse_flag(options.get("exclusive", ""))),
            today=today,
            delimiter=args.delimiter or options.get("delimiter", DEFAULT_DELIMITER),
        )
    except (DayTotalsError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    for msg in data["messages"]:
        print(f"[{msg['level'].upper()}] {msg['code']}: {msg['text']}", file=sys.stderr)

    print_rows(data["rows"])


if __name__ == "__main__":
    main()
