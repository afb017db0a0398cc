"""Models for the catalog matching engine."""

from catalog_matcher.models.configs import MatcherConfig, MatchThresholds
from catalog_matcher.models.items import (
    ExtractionItem,
    ItemSource,
    NormalizedItem,
    ParsedQuantity,
)
from catalog_matcher.models.matching import (
    MatchCandidate,
    MatchProduct,
    MatchReason,
    MatchResult,
    MatchStatus,
    MatchSummary,
)
from catalog_matcher.models.product import ProductFlatCodes, ProductRecord

__all__ = [
    # Config models
    "MatcherConfig",
    "MatchThresholds",
    # Item models
    "ExtractionItem",
    "ItemSource",
    "NormalizedItem",
    "ParsedQuantity",
    # Match models
    "MatchCandidate",
    "MatchProduct",
    "MatchReason",
    "MatchResult",
    "MatchStatus",
    "MatchSummary",
    # Catalog models
    "ProductFlatCodes",
    "ProductRecord",
]
