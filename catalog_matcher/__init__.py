"""Resolve free-text inquiry line items to electronic-component catalog products"""

from catalog_matcher.catalog import load_catalog_snapshot, parse_product_records
from catalog_matcher.config import load_config
from catalog_matcher.matching import (
    CandidateRanker,
    CatalogIndex,
    Matcher,
    build_index,
    match_item,
    normalize_items,
    parse_quantity,
)
from catalog_matcher.models import (
    ExtractionItem,
    MatcherConfig,
    MatchResult,
    MatchThresholds,
    NormalizedItem,
    ProductRecord,
)

__version__ = "0.1.0"

__all__ = [
    "CandidateRanker",
    "CatalogIndex",
    "ExtractionItem",
    "Matcher",
    "MatcherConfig",
    "MatchResult",
    "MatchThresholds",
    "NormalizedItem",
    "ProductRecord",
    "build_index",
    "load_catalog_snapshot",
    "load_config",
    "match_item",
    "normalize_items",
    "parse_product_records",
    "parse_quantity",
]
