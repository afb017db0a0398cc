"""Fuzzy candidate ranking over the catalog index"""

from itertools import islice
from typing import List, Sequence, Set

from catalog_matcher.matching.index import CatalogIndex
from catalog_matcher.matching.normalizer import dice_coefficient, tokenize
from catalog_matcher.models.matching import MatchCandidate

DICE_WEIGHT = 0.65
TOKEN_WEIGHT = 0.35


def score_header(
    query: str,
    candidate: str,
    query_tokens: Sequence[str],
    candidate_tokens: Sequence[str],
) -> float:
    """
    Score a normalized candidate header against a normalized query.

    Weighted combination of:
    - Dice bigram similarity of the full strings
    - Share of query tokens present in the candidate

    Args:
        query: Normalized query
        candidate: Normalized candidate header
        query_tokens: Tokens of the query
        candidate_tokens: Tokens of the candidate header

    Returns:
        Score (0.0 to 1.0); the Dice term alone when the query has no tokens
    """
    dice = dice_coefficient(query, candidate)
    if not query_tokens:
        return dice

    candidate_set = set(candidate_tokens)
    overlap = sum(1 for token in query_tokens if token in candidate_set)
    token_score = overlap / len(query_tokens)

    return min(1.0, DICE_WEIGHT * dice + TOKEN_WEIGHT * token_score)


class CandidateRanker:
    """
    Produce a scored shortlist of catalog products for a query.

    Candidates are the union of the posting lists of the query tokens. A
    query sharing no token with the catalog falls back to scanning the
    first `scan_cap` products in load order.

    Candidates are scored in load order and sorted stably, so equal scores
    keep catalog load order. That order is an implementation detail and
    not something callers should depend on.
    """

    def __init__(self, index: CatalogIndex, scan_cap: int = 1500, limit: int = 5) -> None:
        self._index = index
        self._scan_cap = scan_cap
        self._limit = limit

    def candidate_ids(self, query_tokens: Sequence[str]) -> List[int]:
        """
        Select the product IDs to score.

        Args:
            query_tokens: Tokens of the normalized query

        Returns:
            Product IDs in catalog load order
        """
        ids: Set[int] = set()
        for token in query_tokens:
            ids.update(self._index.postings(token))

        if not ids:
            return list(islice(self._index.product_ids(), self._scan_cap))

        return sorted(ids, key=self._index.position)

    def rank(self, query: str) -> List[MatchCandidate]:
        """
        Rank catalog products for a normalized query.

        Args:
            query: Query in normalized header form

        Returns:
            Up to `limit` candidates, best first
        """
        query_tokens = tokenize(query)

        scored = [
            (
                score_header(
                    query,
                    self._index.normalized_header(product_id),
                    query_tokens,
                    self._index.header_tokens(product_id),
                ),
                product_id,
            )
            for product_id in self.candidate_ids(query_tokens)
        ]
        scored.sort(key=lambda pair: pair[0], reverse=True)

        return [
            MatchCandidate.from_product(self._index.get(product_id), score)
            for score, product_id in scored[: self._limit]
        ]
