"""Line item extraction"""

from .plain_text import dedupe_items, is_likely_noise, line_to_item, parse_plain_text

__all__ = ["dedupe_items", "is_likely_noise", "line_to_item", "parse_plain_text"]
