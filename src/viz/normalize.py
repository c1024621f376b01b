"""Value normalization for schema-less query results.

Generated SQL hands back numbers as formatted strings ("RM 1,234.50", "12%")
and time as free text ("Jan 2024", "2024-01", "01/2024"). The helpers here
turn those into comparable canonical values. None of them raise: a value that
cannot be read yields ``NaN`` (numbers) or ``math.inf`` (month index).
"""

import math
import re
from decimal import Decimal
from typing import Any, Callable, List, Optional, Pattern, Sequence, Tuple, Union

from viz.config import VizSettings, get_settings

Number = Union[int, float]

MONTHS_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
MONTHS_FULL = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

_NON_NUMERIC_CHARS = re.compile(r"[^\d.,-]")
_TIME_NAME_PATTERN = re.compile(r"(^|_)(month|date|period|quarter|year)s?($|_)", re.IGNORECASE)


def normalize_number(value: Any) -> Number:
    """Convert a scalar into a number, or ``NaN`` if it does not read as one.

    Numbers pass through unchanged. Strings keep only digits, commas, periods
    and minus signs; commas are treated as thousands separators.
    """
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, int):
        try:
            float(value)
        except OverflowError:
            return math.nan
        return value
    if isinstance(value, float):
        return value
    if isinstance(value, Decimal):
        return float(value)
    if not isinstance(value, str):
        return math.nan

    cleaned = _NON_NUMERIC_CHARS.sub("", value)
    cleaned = "".join(cleaned.split()).replace(",", "")
    if not cleaned:
        return math.nan
    try:
        parsed = float(cleaned)
    except ValueError:
        return math.nan
    return parsed if math.isfinite(parsed) else math.nan


def is_finite_number(value: Any) -> bool:
    """Return True when the value normalizes to a finite number."""
    return math.isfinite(normalize_number(value))


def format_number(value: Any, settings: Optional[VizSettings] = None) -> str:
    """Format a value with grouped thousands and at most N fraction digits."""
    number = normalize_number(value)
    if not math.isfinite(number):
        return str(value)

    settings = settings or get_settings()
    if isinstance(number, int):
        text = f"{number:,}"
    else:
        text = f"{number:,.{settings.max_fraction_digits}f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"

    # swap through a placeholder so "," and "." can trade places
    return (
        text.replace(",", "\0")
        .replace(".", settings.decimal_separator)
        .replace("\0", settings.thousands_separator)
    )


def format_cell(value: Any, settings: Optional[VizSettings] = None) -> str:
    """Render a raw result cell for tabular display."""
    if value is None:
        return ""
    if is_finite_number(value):
        return format_number(value, settings)
    return str(value)


def _abbr_month(match) -> Optional[int]:
    if match.group(1) not in MONTHS_ABBR:
        return None
    return int(match.group(2)) * 12 + MONTHS_ABBR.index(match.group(1))


def _full_month(match) -> Optional[int]:
    name = match.group(1).lower()
    if name not in MONTHS_FULL:
        return None
    return int(match.group(2)) * 12 + MONTHS_FULL.index(name)


def _year_dash_month(match) -> Optional[int]:
    month = int(match.group(2))
    if not 1 <= month <= 12:
        return None
    return int(match.group(1)) * 12 + month - 1


def _month_slash_year(match) -> Optional[int]:
    month = int(match.group(1))
    if not 1 <= month <= 12:
        return None
    return int(match.group(2)) * 12 + month - 1


def _year_only(match) -> Optional[int]:
    return int(match.group(1)) * 12


# Tried in order; the first matcher returning an index wins.
_MONTH_MATCHERS: List[Tuple[Pattern, Callable[[Any], Optional[int]]]] = [
    (re.compile(r"^([A-Za-z]{3})\s+(\d{4})$"), _abbr_month),
    (re.compile(r"^([A-Za-z]+)\s+(\d{4})$"), _full_month),
    (re.compile(r"^(\d{4})-(\d{2})$"), _year_dash_month),
    (re.compile(r"^(\d{2})/(\d{4})$"), _month_slash_year),
    (re.compile(r"^(\d{4})$"), _year_only),
]


def month_index(text: Any) -> Union[int, float]:
    """Parse month/year text into ``year * 12 + month_offset``.

    Accepts "Jan 2024", "January 2024", "2024-01", "01/2024" and "2024".
    Anything else returns ``math.inf`` so unparseable values sort last.
    """
    if not isinstance(text, str):
        return math.inf
    stripped = text.strip()
    for pattern, handler in _MONTH_MATCHERS:
        match = pattern.match(stripped)
        if not match:
            continue
        index = handler(match)
        if index is not None:
            return index
    return math.inf


def as_text(value: Any) -> str:
    """Render a cell as text for temporal and lexical comparison."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def looks_like_time_name(name: Optional[str]) -> bool:
    """Return True for column names such as ``month``, ``order_date`` or ``years``."""
    if not name:
        return False
    return bool(_TIME_NAME_PATTERN.search(name))


def is_time_like_column(
    name: Optional[str],
    sample_values: Sequence[Any] = (),
    settings: Optional[VizSettings] = None,
) -> bool:
    """Decide whether a column is a chronological axis.

    The name is checked first; otherwise enough of the leading sample values
    must parse as a month index.
    """
    if not name:
        return False
    if looks_like_time_name(name):
        return True
    return values_look_temporal(sample_values, settings)


def values_look_temporal(
    sample_values: Sequence[Any], settings: Optional[VizSettings] = None
) -> bool:
    """Return True when enough leading values parse as a month index."""
    settings = settings or get_settings()
    to_check = list(sample_values)[: settings.time_sample_size]
    parsed = sum(1 for value in to_check if math.isfinite(month_index(as_text(value))))
    required = math.ceil((len(to_check) or 1) * settings.time_like_ratio)
    return parsed >= required
