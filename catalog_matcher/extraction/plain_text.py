"""Line item extraction from plain-text inquiry bodies"""

import logging
import re
from typing import Iterable, List, Optional

from catalog_matcher.matching.quantity import parse_quantity
from catalog_matcher.models.items import ExtractionItem, ItemSource
from catalog_matcher.utils.content_hash import item_key

logger = logging.getLogger(__name__)

# Signature lines, contacts and separators, never order lines
NOISE_PATTERNS = [
    re.compile(r"^--+$"),
    re.compile(r"^спасибо", re.IGNORECASE),
    re.compile(r"^с уважением", re.IGNORECASE),
    re.compile(r"^тел[:\s]", re.IGNORECASE),
    re.compile(r"^e-?mail[:\s]", re.IGNORECASE),
    re.compile(r"^http", re.IGNORECASE),
]

UNIT_WORD_RE = re.compile(
    r"(?<!\w)(?:штук|шт|pcs|pc|метр(?:ов|а)?|м|kg|кг|уп|компл)(?:\.|(?!\w))", re.IGNORECASE
)
SEPARATORS_RE = re.compile(r"[;|]+")
LETTERS_RE = re.compile(r"[A-Za-zА-Яа-яЁё]")
SPACES_RE = re.compile(r"\s+")

MIN_LINE_LENGTH_WITHOUT_QTY = 8


def normalize_spaces(text: str) -> str:
    return SPACES_RE.sub(" ", text).strip()


def is_likely_noise(line: str) -> bool:
    """True for signature, contact and separator lines."""
    stripped = line.strip()
    return any(pattern.search(stripped) for pattern in NOISE_PATTERNS)


def line_to_item(source: ItemSource, line_no: int, raw_line: str) -> Optional[ExtractionItem]:
    """
    Turn one raw line into an extraction item.

    The name-or-code is what remains after removing the quantity, unit
    words and column separators.

    Args:
        source: Source tag of the line
        line_no: Line number to assign
        raw_line: Raw line text

    Returns:
        ExtractionItem, or None for empty and noise lines
    """
    compact = normalize_spaces(raw_line)
    if not compact or is_likely_noise(compact):
        return None

    parsed = parse_quantity(compact)
    without_qty = compact
    if parsed.qty_raw:
        idx = without_qty.rfind(parsed.qty_raw)
        if idx >= 0:
            without_qty = (
                without_qty[:idx] + " " + without_qty[idx + len(parsed.qty_raw) :]
            )

    name = UNIT_WORD_RE.sub(" ", without_qty)
    name = SEPARATORS_RE.sub(" ", name)
    name = normalize_spaces(name)
    if len(name) <= 1:
        name = compact

    meta = {}
    if parsed.qty_raw:
        meta["qty_raw"] = parsed.qty_raw

    return ExtractionItem(
        line_no=line_no,
        source=source,
        raw_line=compact,
        name_or_code=name,
        qty=parsed.qty,
        unit=parsed.unit,
        meta=meta,
    )


def dedupe_items(items: Iterable[ExtractionItem]) -> List[ExtractionItem]:
    """
    Drop repeated items (same source, raw line and quantity).

    Args:
        items: Items in extraction order

    Returns:
        First occurrence of each item, order preserved
    """
    seen = set()
    unique = []
    for item in items:
        key = item_key(item)
        if key in seen:
            logger.debug("Duplicate line item removed: %s", item.raw_line)
            continue
        seen.add(key)
        unique.append(item)
    return unique


def parse_plain_text(text: str, source: ItemSource = "email_text") -> List[ExtractionItem]:
    """
    Extract line items from a plain-text inquiry body.

    Keeps lines that contain letters and either a quantity or at least
    MIN_LINE_LENGTH_WITHOUT_QTY characters; duplicates are dropped and the
    remaining items are numbered from 1.

    Args:
        text: Plain-text body
        source: Source tag for the produced items

    Returns:
        List of ExtractionItem objects in line order
    """
    items = []
    lines = [line.strip() for line in text.replace("\r\n", "\n").split("\n")]

    for line_no, line in enumerate((line for line in lines if line), start=1):
        item = line_to_item(source, line_no, line)
        if item is None:
            continue
        if not LETTERS_RE.search(item.raw_line):
            continue
        if item.qty is None and len(item.raw_line) < MIN_LINE_LENGTH_WITHOUT_QTY:
            continue
        items.append(item)

    return [
        item.model_copy(update={"line_no": position})
        for position, item in enumerate(dedupe_items(items), start=1)
    ]
