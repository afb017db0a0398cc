"""Tiered catalog matching engine"""

from .index import CatalogIndex, build_index
from .matcher import (
    Matcher,
    apply_quantity_override,
    decide_fuzzy,
    match_item,
    normalize_item,
    normalize_items,
    summarize,
)
from .normalizer import (
    dice_coefficient,
    looks_like_code,
    normalize_code,
    normalize_header,
    tokenize,
)
from .quantity import normalize_numeric_token, normalize_unit, parse_quantity
from .ranker import CandidateRanker, score_header

__all__ = [
    "CandidateRanker",
    "CatalogIndex",
    "Matcher",
    "apply_quantity_override",
    "build_index",
    "decide_fuzzy",
    "dice_coefficient",
    "looks_like_code",
    "match_item",
    "normalize_code",
    "normalize_header",
    "normalize_item",
    "normalize_items",
    "normalize_numeric_token",
    "normalize_unit",
    "parse_quantity",
    "score_header",
    "summarize",
    "tokenize",
]
