"""Date parsing and the small date format mini-language used by templates"""

import calendar
import re
from datetime import date


DEFAULT_FORMAT = "Month D, YYYY"

# Longest tokens first so "Month" is not read as "Mon" + "th".
FORMAT_TOKEN_RE = re.compile(r"Weekday|Wkd|Month|Mon|YYYY|YY|MM|M|DD|D")

_TOKENS = {
    "Weekday": lambda d: calendar.day_name[d.weekday()],
    "Wkd":     lambda d: calendar.day_abbr[d.weekday()],
    "Month":   lambda d: calendar.month_name[d.month],
    "Mon":     lambda d: calendar.month_abbr[d.month],
    "YYYY":    lambda d: f"{d.year:04d}",
    "YY":      lambda d: f"{d.year % 100:02d}",
    "MM":      lambda d: f"{d.month:02d}",
    "M":       lambda d: str(d.month),
    "DD":      lambda d: f"{d.day:02d}",
    "D":       lambda d: str(d.day),
}


def parse_date(text: str) -> date:
    """Parse a YYYY-MM-DD date. Raises ValueError on anything else."""
    text = text.strip()
    if not re.fullmatch(r"\d{4}-\d{2}-\d{2}", text):
        raise ValueError(f"expected YYYY-MM-DD, got {text!r}")
    return date.fromisoformat(text)


def format_date(value: date, fmt: str = DEFAULT_FORMAT) -> str:
    """Render value using format tokens; other characters pass through unchanged."""
    return FORMAT_TOKEN_RE.sub(lambda m: _TOKENS[m.group(0)](value), fmt)
