"""Deterministic ordering of x-axis values."""

import math
import unicodedata
from typing import Any, Dict, Iterable, List, Optional, Tuple

from viz.config import VizSettings
from viz.normalize import as_text, is_time_like_column, month_index, values_look_temporal


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _lexical_key(value: Any) -> Tuple[str, str, str]:
    """Collation key: base letters first, then accents, then lowercase before uppercase.

    Independent of the process locale, so ``["banana", "Apple", "apple"]``
    orders as ``apple, Apple, banana``.
    """
    text = unicodedata.normalize("NFKC", as_text(value))
    return (_strip_accents(text).casefold(), text.casefold(), text.swapcase())


def _chronological_key(value: Any) -> Tuple[int, Any]:
    index = month_index(as_text(value))
    if math.isfinite(index):
        return (0, index)
    return (1, _lexical_key(value))


def distinct_values(values: Iterable[Any]) -> List[Any]:
    """Return distinct values in first-seen order."""
    return list(dict.fromkeys(values))


def order_axis_values(
    values: Iterable[Any],
    axis_name: Optional[str] = None,
    settings: Optional[VizSettings] = None,
) -> List[Any]:
    """Order the distinct values of an x-axis.

    Time-like axes sort by month index, with unparseable values last and
    compared lexically among themselves. Other axes sort lexically. Sorting is
    stable, so equal keys keep their first-seen order.
    """
    distinct = distinct_values(values)
    if axis_name is None:
        time_like = values_look_temporal(distinct, settings)
    else:
        time_like = is_time_like_column(axis_name, distinct, settings)
    if time_like:
        return sorted(distinct, key=_chronological_key)
    return sorted(distinct, key=_lexical_key)


def sort_rows_by_axis(
    rows: List[Dict[str, Any]], x_key: str, settings: Optional[VizSettings] = None
) -> List[Dict[str, Any]]:
    """Stable-sort flat rows by the ordered position of their x value.

    Non-record entries are dropped.
    """
    records = [row for row in rows if isinstance(row, dict)]
    ordered = order_axis_values((row.get(x_key) for row in records), x_key, settings)
    position = {value: i for i, value in enumerate(ordered)}
    return sorted(records, key=lambda row: position.get(row.get(x_key), len(ordered)))
