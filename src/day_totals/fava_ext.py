# fava_ext.py
import datetime as dt
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from flask import request
from fava.ext import FavaExtensionBase

from .config import DEFAULT_DELIMITER, DEFAULT_RANGES_FILE, parse_flag
from .errors import DayTotalsError, InvalidArgumentError
from .report import run_day_totals

logger = logging.getLogger(__name__)


def _parse_config(config: Optional[str]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    if not config:
        return out
    for part in config.split(","):
        part = part.strip()
        if not part:
            continue
        if "=" in part:
            k, v = part.split("=", 1)
            out[k.strip()] = v.strip()
    return out


def _opt_int(value: Optional[str], name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError as e:
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}") from e


class DayTotalsReport(FavaExtensionBase):
    """
    Fava extension that renders day counts and rolling day totals
    for a ranges file kept next to the ledger.
    """

    name = "day-totals"
    report_title = "Day Totals"

    def __init__(self, ledger, config: Optional[str] = None) -> None:
        # Config is a comma-separated key=value string, not a Python literal
        super().__init__(ledger, None)
        self._cfg = _parse_config(config)
        self._cache_key = None
        self._cache_data = None

    def _param(self, key: str) -> Optional[str]:
        value = request.args.get(key)
        if value is None or value == "":
            value = self._cfg.get(key)
        return value or None

    def _window_params(self):
        """`from` and `window` from the request replace both configured values."""
        q = request.args
        if q.get("from") or q.get("window"):
            return q.get("from") or None, q.get("window") or None
        return self._cfg.get("from") or None, self._cfg.get("window") or None

    # Main data builder consumed by the template
    def data(self) -> Dict[str, Any]:
        journal_path = getattr(self.ledger, "beancount_file_path", None) or self.ledger.options.get("filename")
        base_dir = Path(str(journal_path)).resolve().parent

        # relative paths are taken from the ledger directory
        ranges_path = str(base_dir / self._cfg.get("ranges", DEFAULT_RANGES_FILE))
        today = dt.date.today()
        from_param, window_param = self._window_params()

        cache_key = (
            ranges_path,
            today,
            self._param("date"),
            from_param,
            window_param,
            self._param("reset"),
            self._param("history"),
            self._param("max"),
            self._param("exclusive"),
        )
        if self._cache_key == cache_key and self._cache_data is not None:
            return self._cache_data

        result: Dict[str, Any] = {
            "paths": {"ranges": ranges_path},
            "params": None,
            "rows": [],
            "summary": None,
            "messages": [],
        }

        try:
            core = run_day_totals(
                ranges=ranges_path,
                date=self._param("date"),
                from_date=from_param,
                reset=self._param("reset"),
                window=_opt_int(window_param, "window"),
                history=_opt_int(self._param("history"), "history"),
                max_days=_opt_int(self._param("max"), "max"),
                lower_inclusive=not parse_flag(self._param("exclusive") or ""),
                today=today,
                delimiter=self._cfg.get("delimiter", DEFAULT_DELIMITER),
            )
        except (DayTotalsError, OSError) as exc:
            logger.warning("Day totals failed for %s: %s", ranges_path, exc)
            result["messages"].append({"level": "error", "code": "day-totals-failed", "text": str(exc)})
            return result

        rows = core["rows"]
        params = core["params"]
        latest = rows[-1] if rows else None
        result.update(
            {
                "params": params,
                # newest first for display
                "rows": list(reversed(rows)),
                "messages": core["messages"],
                "summary": {
                    "date": params.date,
                    "window_size": params.window_size,
                    "reset_date": params.reset_date,
                    "latest_total": latest.window_total if latest else 0,
                    "remaining": latest.remaining if latest else params.max_days,
                    "peak_total": max((r.window_total for r in rows), default=0),
                    "max_days": params.max_days,
                },
            }
        )

        self._cache_key = cache_key
        self._cache_data = result
        return result


# Required entry point for Fava
Extension = DayTotalsReport
