"""Text normalization for catalog headers, codes and queries"""

import re
from collections import Counter
from typing import List

# Multiplication sign variants: "×", Cyrillic "Х"/"х" and "*"
MULTIPLY_SIGNS = str.maketrans({"×": "X", "Х": "X", "х": "X", "*": "X"})

QUOTES_RE = re.compile(r"[\"'`«»“”„]")
SQUARE_MM_RE = re.compile(r"[MМ][MМ]²")  # Latin or Cyrillic "ММ"
AREA_UNIT_RE = re.compile(r"КВ(?:\. ?| )ММ")
HEADER_NOT_ALLOWED_RE = re.compile(r"[^A-ZА-Я0-9X\-/\s.]")
CODE_NOT_ALLOWED_RE = re.compile(r"[^A-ZА-Я0-9\-_/.]")
SPACES_RE = re.compile(r"\s+")
LETTER_RE = re.compile(r"[A-Za-zА-Яа-яЁё]")
DIGIT_RE = re.compile(r"[0-9]")

MIN_TOKEN_LENGTH = 2


def normalize_header(text: str) -> str:
    """
    Canonicalize free text into a comparable header string.

    Uppercases, folds "Ё" to "Е", maps multiplication signs to "X" and
    square-millimetre spellings to "MM2", then replaces quotes and any
    character outside [A-Z А-Я 0-9 X - / .] with spaces.

    Args:
        text: Product name, query or raw line

    Returns:
        Normalized header (idempotent)
    """
    s = text.upper().replace("Ё", "Е")
    s = s.translate(MULTIPLY_SIGNS)
    s = SQUARE_MM_RE.sub("MM2", s)
    s = QUOTES_RE.sub(" ", s)
    s = HEADER_NOT_ALLOWED_RE.sub(" ", s)
    s = SPACES_RE.sub(" ", s).strip()
    # "кв.мм" may only become adjacent after the cleanup above
    return AREA_UNIT_RE.sub("MM2", s)


def normalize_code(text: str) -> str:
    """
    Canonicalize an identifying code.

    Args:
        text: Raw code (articul, flat scheme code, analog code, query)

    Returns:
        Uppercase code restricted to [A-Z А-Я 0-9 - _ / .], "" if nothing is left
    """
    s = text.upper().translate(MULTIPLY_SIGNS)
    s = SPACES_RE.sub("", s)
    return CODE_NOT_ALLOWED_RE.sub("", s)


def tokenize(text: str) -> List[str]:
    """Split the normalized header into tokens of at least two characters."""
    return [
        token
        for token in normalize_header(text).split(" ")
        if len(token) >= MIN_TOKEN_LENGTH
    ]


def looks_like_code(text: str) -> bool:
    """True if the text has 3+ characters, a letter and a digit."""
    if len(text.strip()) < 3:
        return False
    return bool(LETTER_RE.search(text)) and bool(DIGIT_RE.search(text))


def _bigrams(text: str) -> Counter:
    return Counter(text[i : i + 2] for i in range(len(text) - 1))


def dice_coefficient(a: str, b: str) -> float:
    """
    Bigram (Sørensen-Dice) similarity of two strings.

    The intersection is a bag intersection: a bigram repeated in both
    strings counts as many times as it occurs in the rarer one.

    Args:
        a: First string
        b: Second string

    Returns:
        Similarity score (0.0 to 1.0); 0.0 if either string is shorter than 2
    """
    if len(a) < 2 or len(b) < 2:
        return 0.0
    if a == b:
        return 1.0

    a_pairs = _bigrams(a)
    b_pairs = _bigrams(b)
    intersection = sum((a_pairs & b_pairs).values())

    return 2.0 * intersection / (len(a) - 1 + len(b) - 1)
