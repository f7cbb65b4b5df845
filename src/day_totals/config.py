# config.py
import os
import re
from typing import Dict

DEFAULT_DELIMITER = ","
DEFAULT_RANGES_FILE = "ranges.csv"

# Upper bound for window size and history count (roughly a century of days).
MAX_SPAN_DAYS = 36_525

OPTION_NAMES = frozenset(
    {"date", "from", "window", "reset", "history", "max", "delimiter", "exclusive"}
)

_RX_OPTION = re.compile(
    r'^\s*option\s+"([a-z_]+)"\s+"([^"]*)"\s*$'
)


def load_options(path: str) -> Dict[str, str]:
    """
    Read `option "name" "value"` lines from a defaults file.
    Unknown option names and any other lines are ignored; missing file -> {}.
    """
    if not os.path.exists(path):
        return {}
    options: Dict[str, str] = {}
    with open(path, "r", encoding="utf-8-sig") as f:
        for line in f:
            m = _RX_OPTION.match(line)
            if not m:
                continue
            name, value = m.groups()
            if name in OPTION_NAMES:
                options[name] = value
    return options


def parse_flag(value: str) -> bool:
    """Interpret a config/query string as a boolean switch."""
    return value.strip().lower() in {"1", "true", "yes", "on"}
