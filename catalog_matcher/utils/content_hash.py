"""Stable content keys for duplicate detection"""

import hashlib
import json
from typing import Any

from pydantic import BaseModel

from catalog_matcher.models.items import ExtractionItem

KEY_LENGTH = 16


def _canonical(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, float):
        # 100.0 and 100 describe the same quantity
        return f"{value:.15g}"
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    if isinstance(value, (dict, list)):
        return json.dumps(value, sort_keys=True, ensure_ascii=False, default=str)
    return str(value)


def content_hash(*parts: Any, length: int = KEY_LENGTH) -> str:
    """
    Hash a sequence of values into a short hex key.

    Args:
        *parts: Values to combine; None, floats, models and containers get
            a canonical text form first
        length: Number of hex characters to keep

    Returns:
        Truncated SHA-256 hex digest
    """
    joined = "|".join(_canonical(part) for part in parts)
    return hashlib.sha256(joined.encode("utf-8")).hexdigest()[:length]


def item_key(item: ExtractionItem) -> str:
    """Dedupe key of an extracted line: source, raw line and quantity."""
    return content_hash(item.source, item.raw_line, item.qty)
