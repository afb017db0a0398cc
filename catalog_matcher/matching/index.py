"""In-memory catalog index for code, header and token lookups"""

import logging
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple

from catalog_matcher.matching.normalizer import normalize_code, normalize_header, tokenize
from catalog_matcher.models.product import ProductRecord

logger = logging.getLogger(__name__)

_EMPTY: Tuple[ProductRecord, ...] = ()
_NO_IDS: FrozenSet[int] = frozenset()


class CatalogIndex:
    """
    Lookup structures built once from a full catalog snapshot.

    - code map: normalized code -> products (several products may share a code)
    - header map: full normalized header -> products (exact tier)
    - posting lists: header token -> product IDs (fuzzy prefilter)

    The index is read-only after construction and can be shared between
    threads. A new snapshot means a new index.
    """

    def __init__(self) -> None:
        self._products: Dict[int, ProductRecord] = {}
        self._positions: Dict[int, int] = {}
        self._by_code: Dict[str, Tuple[ProductRecord, ...]] = {}
        self._by_header: Dict[str, Tuple[ProductRecord, ...]] = {}
        self._postings: Dict[str, FrozenSet[int]] = {}
        self._headers: Dict[int, str] = {}
        self._header_tokens: Dict[int, Tuple[str, ...]] = {}

    @classmethod
    def build(cls, products: Iterable[ProductRecord]) -> "CatalogIndex":
        """
        Build the index in a single pass over the snapshot.

        Args:
            products: Full catalog snapshot, in load order

        Returns:
            Populated CatalogIndex
        """
        index = cls()
        by_code: Dict[str, List[ProductRecord]] = {}
        by_header: Dict[str, List[ProductRecord]] = {}
        postings: Dict[str, Set[int]] = {}

        for product in products:
            if product.id in index._products:
                logger.warning(
                    "Duplicate product id %s (%r) skipped, keeping %r",
                    product.id,
                    product.header,
                    index._products[product.id].header,
                )
                continue

            index._positions[product.id] = len(index._products)
            index._products[product.id] = product

            # The same code in two schemes of one product is not a collision
            seen_codes: Set[str] = set()
            for raw_code in product.identifying_codes():
                code = normalize_code(raw_code)
                if not code or code in seen_codes:
                    continue
                seen_codes.add(code)
                by_code.setdefault(code, []).append(product)

            header = normalize_header(product.header)
            index._headers[product.id] = header
            if header:
                by_header.setdefault(header, []).append(product)

            tokens = tuple(tokenize(header))
            index._header_tokens[product.id] = tokens
            for token in tokens:
                postings.setdefault(token, set()).add(product.id)

        index._by_code = {code: tuple(items) for code, items in by_code.items()}
        index._by_header = {header: tuple(items) for header, items in by_header.items()}
        index._postings = {token: frozenset(ids) for token, ids in postings.items()}

        logger.debug(
            "Catalog index built: %d products, %d codes, %d headers, %d tokens",
            len(index._products),
            len(index._by_code),
            len(index._by_header),
            len(index._postings),
        )
        return index

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._products

    def get(self, product_id: int) -> Optional[ProductRecord]:
        return self._products.get(product_id)

    def product_ids(self) -> Iterator[int]:
        """Iterate product IDs in catalog load order"""
        return iter(self._products)

    def position(self, product_id: int) -> int:
        """Load-order position of a product"""
        return self._positions[product_id]

    def lookup_code(self, code: str) -> Tuple[ProductRecord, ...]:
        """Products carrying an already normalized code"""
        return self._by_code.get(code, _EMPTY)

    def lookup_header(self, header: str) -> Tuple[ProductRecord, ...]:
        """Products whose full normalized header equals the given header"""
        return self._by_header.get(header, _EMPTY)

    def postings(self, token: str) -> FrozenSet[int]:
        """IDs of products whose header contains the token"""
        return self._postings.get(token, _NO_IDS)

    def normalized_header(self, product_id: int) -> str:
        return self._headers[product_id]

    def header_tokens(self, product_id: int) -> Tuple[str, ...]:
        return self._header_tokens[product_id]


def build_index(products: Iterable[ProductRecord]) -> CatalogIndex:
    """Build a CatalogIndex from a catalog snapshot."""
    return CatalogIndex.build(products)
