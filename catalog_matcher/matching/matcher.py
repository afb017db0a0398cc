"""Tiered resolution of inquiry line items to catalog products"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from catalog_matcher.matching.index import CatalogIndex
from catalog_matcher.matching.normalizer import looks_like_code, normalize_code, normalize_header
from catalog_matcher.matching.ranker import CandidateRanker
from catalog_matcher.models.configs import MatcherConfig, MatchThresholds
from catalog_matcher.models.items import ExtractionItem, NormalizedItem
from catalog_matcher.models.matching import (
    MatchCandidate,
    MatchProduct,
    MatchReason,
    MatchResult,
    MatchStatus,
    MatchSummary,
)
from catalog_matcher.models.product import ProductRecord

logger = logging.getLogger(__name__)

CODE_UNIQUE_CONFIDENCE = 0.99
CODE_AMBIGUOUS_CONFIDENCE = 0.80
HEADER_UNIQUE_CONFIDENCE = 0.95
HEADER_AMBIGUOUS_CONFIDENCE = 0.78


def normalize_item(item: ExtractionItem) -> NormalizedItem:
    """
    Attach the normalized name-or-code to an extraction item.

    Falls back to the raw line when no explicit name or code was parsed.
    """
    source = item.name_or_code if item.name_or_code is not None else item.raw_line
    data = item.model_dump()
    data["normalized_name_or_code"] = normalize_header(source)
    return NormalizedItem(**data)


def normalize_items(items: Iterable[ExtractionItem]) -> List[NormalizedItem]:
    """Normalize a batch of extraction items, keeping their order."""
    return [normalize_item(item) for item in items]


def _unique_hit(product: ProductRecord, confidence: float, reason: MatchReason) -> MatchResult:
    return MatchResult(
        status="OK",
        confidence=confidence,
        reason=reason,
        product=MatchProduct.from_product(product),
        candidates=[MatchCandidate.from_product(product, confidence)],
    )


def _ambiguous_hit(
    products: Sequence[ProductRecord],
    confidence: float,
    reason: MatchReason,
    limit: int,
) -> MatchResult:
    return MatchResult(
        status="REVIEW",
        confidence=confidence,
        reason=reason,
        product=None,
        candidates=[MatchCandidate.from_product(p, confidence) for p in products[:limit]],
    )


def decide_fuzzy(
    candidates: Sequence[MatchCandidate], thresholds: MatchThresholds
) -> Tuple[MatchStatus, float, MatchReason]:
    """
    Turn ranked fuzzy candidates into a verdict.

    An automatic match needs both a high score and a clear margin over the
    runner-up; a lone candidate's margin is its own score.

    Args:
        candidates: Ranked candidates, best first (non-empty)
        thresholds: Decision thresholds

    Returns:
        Tuple of (status, confidence, reason)
    """
    top1 = candidates[0].score
    gap = top1 - candidates[1].score if len(candidates) > 1 else top1

    if top1 >= thresholds.ok_threshold and gap >= thresholds.gap_threshold:
        return "OK", top1, "FUZZY"
    if top1 >= thresholds.review_threshold:
        return "REVIEW", top1, "FUZZY"
    return "NOT_FOUND", top1, "NONE"


def has_usable_quantity(item: ExtractionItem, thresholds: MatchThresholds) -> bool:
    return item.qty is not None and item.qty > thresholds.min_valid_qty


def apply_quantity_override(
    item: ExtractionItem, result: MatchResult, thresholds: MatchThresholds
) -> MatchResult:
    """
    Route results without a usable quantity to review.

    No order line can be placed without a quantity, so even a confident
    identity match goes to a human. Results without any candidate stay as
    they are.

    Args:
        item: The matched line item
        result: Verdict of the match tiers
        thresholds: Holds the confidence cap and the minimum valid quantity

    Returns:
        The same result, or a REVIEW copy with capped confidence
    """
    if has_usable_quantity(item, thresholds) or not result.candidates:
        return result

    return result.model_copy(
        update={
            "status": "REVIEW",
            "confidence": min(result.confidence, thresholds.missing_qty_confidence_cap),
        }
    )


def _resolve(
    item: NormalizedItem, index: CatalogIndex, thresholds: MatchThresholds
) -> MatchResult:
    limit = thresholds.candidate_limit
    name_or_code = item.name_or_code or ""

    code = normalize_code(name_or_code)
    if looks_like_code(name_or_code) and code:
        by_code = index.lookup_code(code)
        if len(by_code) == 1:
            return _unique_hit(by_code[0], CODE_UNIQUE_CONFIDENCE, "CODE")
        if len(by_code) > 1:
            return _ambiguous_hit(by_code, CODE_AMBIGUOUS_CONFIDENCE, "CODE", limit)

    query = item.normalized_name_or_code or normalize_header(item.raw_line)

    by_header = index.lookup_header(query)
    if len(by_header) == 1:
        return _unique_hit(by_header[0], HEADER_UNIQUE_CONFIDENCE, "HEADER")
    if len(by_header) > 1:
        return _ambiguous_hit(by_header, HEADER_AMBIGUOUS_CONFIDENCE, "HEADER", limit)

    ranker = CandidateRanker(index, scan_cap=thresholds.scan_cap, limit=limit)
    candidates = ranker.rank(query)
    if not candidates:
        return MatchResult(status="NOT_FOUND", confidence=0.0, reason="NONE")

    status, confidence, reason = decide_fuzzy(candidates, thresholds)
    product = None
    if status != "NOT_FOUND":
        product = MatchProduct.from_product(index.get(candidates[0].id))

    return MatchResult(
        status=status,
        confidence=confidence,
        reason=reason,
        product=product,
        candidates=candidates,
    )


def match_item(
    item: NormalizedItem,
    index: CatalogIndex,
    thresholds: Optional[MatchThresholds] = None,
) -> MatchResult:
    """
    Resolve one line item against the catalog.

    Tiers, first applicable wins:
    1. Code: unique normalized code hit (only for code-like names)
    2. Header: exact normalized header hit
    3. Fuzzy: ranked candidates with score and margin thresholds

    A missing or non-positive quantity then forces REVIEW. The function
    keeps no state: the same inputs always give the same result.

    Args:
        item: Normalized line item
        index: Catalog index built from the current snapshot
        thresholds: Decision thresholds (defaults if None)

    Returns:
        MatchResult for the item
    """
    thresholds = thresholds or MatchThresholds()

    result = _resolve(item, index, thresholds)
    result = apply_quantity_override(item, result, thresholds)

    logger.debug(
        "Line %s matched: status=%s reason=%s confidence=%.2f",
        item.line_no,
        result.status,
        result.reason,
        result.confidence,
    )
    return result


def summarize(results: Iterable[MatchResult]) -> MatchSummary:
    """
    Count match results by status.

    Args:
        results: Results of one processing run

    Returns:
        MatchSummary with per-status counts
    """
    summary = {"extracted": 0, "ok": 0, "review": 0, "not_found": 0}
    for result in results:
        summary["extracted"] += 1
        if result.status == "OK":
            summary["ok"] += 1
        elif result.status == "REVIEW":
            summary["review"] += 1
        else:
            summary["not_found"] += 1
    return MatchSummary(**summary)


class Matcher:
    """Catalog snapshot plus thresholds, ready to match line items"""

    def __init__(
        self,
        products: Iterable[ProductRecord],
        config: Optional[MatcherConfig] = None,
    ) -> None:
        self.config = config or MatcherConfig()
        self.index = CatalogIndex.build(products)

    @property
    def thresholds(self) -> MatchThresholds:
        return self.config.thresholds

    def match(self, item: NormalizedItem) -> MatchResult:
        return match_item(item, self.index, self.thresholds)

    def match_many(self, items: Iterable[NormalizedItem]) -> List[MatchResult]:
        """
        Match a batch of items, one result per item in input order.

        Args:
            items: Normalized items in line-number order

        Returns:
            List of MatchResult objects
        """
        results = [self.match(item) for item in items]

        summary = summarize(results)
        logger.info(
            "Matched %d items against %d products: %d ok, %d review, %d not found",
            summary.extracted,
            len(self.index),
            summary.ok,
            summary.review,
            summary.not_found,
        )
        return results
