"""Column classification against keyword families.

Each family is an ordered list of case-insensitive regex fragments. Order is
significant for the metric family, where the first keyword a column matches
decides its priority.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Pattern, Sequence

from viz.normalize import is_finite_number

logger = logging.getLogger(__name__)


class KeywordFamily(Enum):
    """Name-based column families used by axis resolution."""

    TIME = "time"
    GEOGRAPHY = "geography"
    PRODUCT = "product"
    METRIC = "metric"


def _compile(fragments: Sequence[str]) -> List[Pattern]:
    return [re.compile(fragment, re.IGNORECASE) for fragment in fragments]


TIME_KEYWORDS = _compile(["^month$", "month", "date", "period", "quarter", "^year$"])

GEOGRAPHY_KEYWORDS = _compile(
    ["^region$", "region", "^branch$", "branch_name", "city", "country", "location"]
)

PRODUCT_KEYWORDS = _compile(
    [
        "^product_category$",
        "product_category",
        "^category$",
        "category",
        "^product$",
        "model",
        "product_name",
        "product",
    ]
)

# Highest priority first.
METRIC_KEYWORDS = _compile(
    [
        "revenue_rm",
        "revenue",
        "total_amount",
        "price",
        "sales",
        "total",
        "total_sales",
        "quantity",
        "qty",
        "count",
    ]
)

FAMILY_KEYWORDS: Dict[KeywordFamily, List[Pattern]] = {
    KeywordFamily.TIME: TIME_KEYWORDS,
    KeywordFamily.GEOGRAPHY: GEOGRAPHY_KEYWORDS,
    KeywordFamily.PRODUCT: PRODUCT_KEYWORDS,
    KeywordFamily.METRIC: METRIC_KEYWORDS,
}


def name_matches(name: Optional[str], patterns: Sequence[Pattern]) -> bool:
    """Return True if any pattern is found in the column name."""
    if not name:
        return False
    return any(pattern.search(name) for pattern in patterns)


def first_match_rank(name: Optional[str], patterns: Sequence[Pattern]) -> Optional[int]:
    """Return the index of the first pattern found in the name, if any."""
    if not name:
        return None
    for rank, pattern in enumerate(patterns):
        if pattern.search(name):
            return rank
    return None


@dataclass(frozen=True)
class ColumnProfile:
    """Classification of one column of a result sample."""

    name: str
    is_numeric: bool
    families: FrozenSet[KeywordFamily] = field(default_factory=frozenset)
    metric_rank: Optional[int] = None

    def has(self, family: KeywordFamily) -> bool:
        """Return True if the column name matched the given family."""
        return family in self.families


def classify_column(name: str, sample_value: Any) -> ColumnProfile:
    """Classify a single column from its name and sample value."""
    families = frozenset(
        family for family, patterns in FAMILY_KEYWORDS.items() if name_matches(name, patterns)
    )
    return ColumnProfile(
        name=name,
        is_numeric=is_finite_number(sample_value),
        families=families,
        metric_rank=first_match_rank(name, METRIC_KEYWORDS),
    )


def classify_columns(sample: Optional[Dict[str, Any]]) -> List[ColumnProfile]:
    """Classify every column of a sample record, preserving column order."""
    if not sample or not isinstance(sample, dict):
        return []

    profiles = [classify_column(str(name), value) for name, value in sample.items()]
    logger.debug(
        "Classified columns: %s",
        {p.name: (p.is_numeric, sorted(f.value for f in p.families)) for p in profiles},
    )
    return profiles
