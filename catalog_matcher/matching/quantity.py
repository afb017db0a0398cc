"""Quantity and unit extraction from raw inquiry lines"""

import re
from typing import Optional

from catalog_matcher.models.items import ParsedQuantity

# Longer spellings first so "штук" is not cut to "шт"
UNIT_PATTERN = r"штук|шт|pcs|pc|метр(?:ов|а)?|м\.?|kg|кг|уп\.?|компл\.?"
# Thousands groups ("1 000", "1.000", "1 000,5") or a plain/decimal number
NUMBER_PATTERN = r"\d{1,3}(?:[ .,]\d{3})+(?:[.,]\d+)?|\d+(?:[.,]\d+)?"

QTY_WITH_UNIT_RE = re.compile(
    rf"(?<![\w.,])(?P<number>{NUMBER_PATTERN})\s*(?P<unit>{UNIT_PATTERN})(?![a-zа-яё])",
    re.IGNORECASE,
)
STANDALONE_NUMBER_RE = re.compile(
    rf"(?<![\w.,])(?P<number>{NUMBER_PATTERN})(?!\w|[.,]\w)",
)
DOT_THOUSANDS_RE = re.compile(r"\d{1,3}(?:\.\d{3})+")
COMMA_THOUSANDS_RE = re.compile(r"\d{1,3}(?:,\d{3})+")
NUMBER_SEPARATORS_RE = re.compile(r"[.,]")
SPACES_RE = re.compile(r"\s+")

UNIT_ALIASES = {
    "шт": "шт",
    "штук": "шт",
    "pcs": "шт",
    "pc": "шт",
    "м": "м",
    "м.": "м",
    "метр": "м",
    "метра": "м",
    "метров": "м",
    "kg": "кг",
    "кг": "кг",
    "уп": "уп",
    "уп.": "уп",
}


def normalize_unit(unit: str) -> str:
    """
    Map a unit spelling to its canonical short form.

    Args:
        unit: Unit as written in the line (e.g. 'PCS', 'штук', 'м.')

    Returns:
        One of шт/м/кг/уп, or the lower-cased input if the unit is not known
    """
    token = unit.strip().lower()
    return UNIT_ALIASES.get(token, token)


def normalize_numeric_token(token: str) -> str:
    """
    Turn a matched number into a float-parseable string.

    "1 000" -> "1000", "1.000" -> "1000", "1,000" -> "1000", "1,5" -> "1.5",
    "1 000,5" -> "1000.5", "1.000,5" -> "1000.5".
    """
    compact = token.replace(" ", "")
    if DOT_THOUSANDS_RE.fullmatch(compact):
        return compact.replace(".", "")
    if COMMA_THOUSANDS_RE.fullmatch(compact):
        return compact.replace(",", "")

    # Otherwise the last separator is the decimal point
    decimal_at = max(compact.rfind(","), compact.rfind("."))
    if decimal_at < 0:
        return compact
    integer = NUMBER_SEPARATORS_RE.sub("", compact[:decimal_at])
    return f"{integer}.{compact[decimal_at + 1 :]}"


def _to_float(token: str) -> Optional[float]:
    try:
        return float(normalize_numeric_token(token))
    except ValueError:
        return None


def parse_quantity(line: str) -> ParsedQuantity:
    """
    Extract a quantity and unit from one raw line.

    A number followed by a unit wins over a bare number; among several
    candidates the rightmost is taken, since quantities usually follow the
    product description ("ВВГнг 3х2.5 100 шт" -> 100).

    Args:
        line: Raw text line

    Returns:
        ParsedQuantity; all fields are None when no number is found
    """
    compact = SPACES_RE.sub(" ", line).strip()

    with_unit = list(QTY_WITH_UNIT_RE.finditer(compact))
    if with_unit:
        last = with_unit[-1]
        return ParsedQuantity(
            qty=_to_float(last.group("number")),
            unit=normalize_unit(last.group("unit")),
            qty_raw=last.group(0),
        )

    numbers = list(STANDALONE_NUMBER_RE.finditer(compact))
    if numbers:
        last = numbers[-1]
        return ParsedQuantity(
            qty=_to_float(last.group("number")),
            qty_raw=last.group(0),
        )

    return ParsedQuantity()
