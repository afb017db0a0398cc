"""Catalog snapshot loading and product record validation"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

from catalog_matcher.models.product import ProductRecord

logger = logging.getLogger(__name__)


def parse_product_record(raw: Dict[str, Any]) -> ProductRecord:
    """
    Validate one catalog API payload into a ProductRecord.

    The whole payload is kept as the record's raw_payload for audit.

    Args:
        raw: Product payload with camelCase keys (id, header, syncUid, ...)

    Returns:
        ProductRecord

    Raises:
        ValueError: If the payload has no usable id or header
    """
    if not isinstance(raw, dict):
        raise ValueError(f"Product payload must be an object, got {type(raw).__name__}")

    return ProductRecord.model_validate({**raw, "rawPayload": dict(raw)})


def parse_product_records(
    raws: Iterable[Dict[str, Any]],
) -> Tuple[List[ProductRecord], List[Dict[str, Any]]]:
    """
    Validate a batch of catalog payloads, skipping malformed ones.

    Args:
        raws: Product payloads as returned by the catalog API

    Returns:
        Tuple of (valid records, rejected raw payloads)
    """
    records = []
    rejected = []

    for raw in raws:
        try:
            records.append(parse_product_record(raw))
        except ValueError as e:
            product_id = raw.get("id") if isinstance(raw, dict) else None
            logger.warning("Rejected catalog record id=%r: %s", product_id, e)
            rejected.append(raw)

    return records, rejected


def load_catalog_snapshot(file_path: Path | str) -> List[ProductRecord]:
    """
    Load a full catalog snapshot from a JSON file.

    Args:
        file_path: JSON file holding a list of products, or an object
            with a "products" list

    Returns:
        List of valid ProductRecord objects in file order

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the document has an unexpected shape
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Catalog snapshot not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        document = json.load(f)

    if isinstance(document, dict):
        document = document.get("products")
    if not isinstance(document, list):
        raise ValueError(
            f"Catalog snapshot must be a list of products or an object with a "
            f"'products' list: {file_path}"
        )

    records, rejected = parse_product_records(document)
    if rejected:
        logger.warning(
            "Loaded %d products from %s, rejected %d malformed records",
            len(records),
            file_path,
            len(rejected),
        )
    return records
