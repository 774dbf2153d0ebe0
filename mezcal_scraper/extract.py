from __future__ import annotations

import re
from functools import reduce
from typing import List, Optional, Tuple

from .lexicons import (
    BRANDS_BY_LENGTH,
    DEFAULT_TABLE_BRAND,
    KNOWN_MAGUEYS,
    MEZCAL_INDICATORS,
    NON_MEZCAL_MARKERS,
)


SIZE_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(ml|l|liters|litres)", re.IGNORECASE)
MEZCAL_WORD_RE = re.compile(r"mezcal", re.IGNORECASE)
MEZCAL_SPLIT_RE = re.compile(r" mezcal ", re.IGNORECASE)
DEFAULT_BRAND_RE = re.compile(re.escape(DEFAULT_TABLE_BRAND), re.IGNORECASE)
ASCII_DIGITS_RE = re.compile(r"[0-9]+")
PRICE_STRIP_RE = re.compile(r"[^0-9.]")
PRICE_PREFIX_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")

_INDICATORS_LOWER = tuple(word.lower() for word in MEZCAL_INDICATORS)
_MAGUEYS_LOWER = tuple(name.lower() for name in KNOWN_MAGUEYS)

Range = Tuple[int, int]


def is_relevant(title: Optional[str]) -> bool:
    """Return True when a product title describes a mezcal."""
    if not title:
        return False
    lower = title.lower()

    if "mezcal" in lower:
        # The leading word decides: "Tequila aged in Mezcal barrels" is a tequila.
        return not lower.startswith("tequila")

    if not any(word in lower for word in _INDICATORS_LOWER):
        return False
    return not any(marker in lower for marker in NON_MEZCAL_MARKERS)


def extract_brand(title: Optional[str]) -> str:
    """Longest known brand contained in the title, else the title's first word."""
    if not title or not title.strip():
        return "Unknown"
    lower = title.lower()
    for brand in BRANDS_BY_LENGTH:
        if brand.lower() in lower:
            return brand
    return title.split()[0]


def extract_maguey_from_title(title: Optional[str]) -> str:
    # Free-text titles: drop the category word and keep whatever is left.
    if not title:
        return ""
    return MEZCAL_WORD_RE.sub("", title).strip()


def split_description(description: Optional[str]) -> Tuple[str, str]:
    """
    Split a table description such as "Rey Campero Mezcal Tobala Tepeztate"
    into (brand, maguey). The maguey part is comma-formatted.
    """
    if not description:
        return "", ""

    parts = MEZCAL_SPLIT_RE.split(description)
    if len(parts) > 1:
        brand = parts[0].strip()
        maguey = " Mezcal ".join(parts[1:]).strip()
    elif description.lower().startswith("mezcal "):
        brand = DEFAULT_TABLE_BRAND
        maguey = DEFAULT_BRAND_RE.sub("", description, count=1).strip()
    else:
        brand = description
        maguey = ""

    if not brand and description.lower().startswith("mezcal"):
        brand = "Mezcal"
        maguey = description[6:].strip()
    if not brand:
        brand = extract_brand(description)

    return brand, format_magueys(maguey)


def _find_maguey_ranges(text: str) -> List[Range]:
    lower = text.lower()
    ranges: List[Range] = []
    for name in _MAGUEYS_LOWER:
        start = lower.find(name)
        while start != -1:
            end = start + len(name)
            before_ok = start == 0 or text[start - 1].isspace()
            after_ok = end == len(text) or text[end].isspace()
            if before_ok and after_ok:
                ranges.append((start, end))
            start = lower.find(name, start + 1)
    return ranges


def _keep_longest(kept: List[Range], current: Range) -> List[Range]:
    if kept and current[0] < kept[-1][1]:
        if current[1] > kept[-1][1]:
            return kept[:-1] + [current]
        return kept
    return kept + [current]


def format_magueys(text: Optional[str]) -> str:
    """Insert commas between varietal names that are separated only by whitespace.

    "Tobala Tepeztate" -> "Tobala, Tepeztate". Overlapping lexicon hits are
    resolved in favour of the one ending later, so "Tobaxiche Amarillo" stays whole.
    """
    if not text:
        return ""
    ranges = sorted(_find_maguey_ranges(text), key=lambda r: r[0])
    merged: List[Range] = reduce(_keep_longest, ranges, [])
    if len(merged) < 2:
        return text

    result = text
    # Right to left so earlier offsets stay valid.
    for (_, prev_end), (next_start, _) in reversed(list(zip(merged, merged[1:]))):
        gap = text[prev_end:next_start]
        if gap and gap.isspace():
            result = result[:prev_end] + "," + result[prev_end:]
    return result


def _format_quantity(qty: float) -> str:
    if qty.is_integer():
        return str(int(qty))
    return repr(qty)


def _size_from_match(match: "re.Match[str]") -> str:
    qty = float(match.group(1))
    if match.group(2).lower().startswith("l"):
        qty *= 1000
    return f"{_format_quantity(qty)}ml"


def normalize_size(raw: Optional[str]) -> str:
    """Canonicalize a size cell to "<number>ml", passing through what can't be parsed."""
    if not raw:
        return ""
    match = SIZE_RE.search(raw)
    if match:
        return _size_from_match(match)
    stripped = raw.strip()
    if ASCII_DIGITS_RE.fullmatch(stripped):
        return f"{stripped}ml"
    if "750" in raw and "750ml" not in raw.lower():
        return "750ml"
    return raw


def extract_size(title: Optional[str]) -> str:
    # Like normalize_size, but a title that carries no size yields "" rather than itself.
    if not title:
        return ""
    match = SIZE_RE.search(title)
    if match:
        return _size_from_match(match)
    if "750" in title and "750ml" not in title.lower():
        return "750ml"
    return ""


def price_value(price: Optional[str]) -> float:
    if not price:
        return 0.0
    cleaned = PRICE_STRIP_RE.sub("", price)
    match = PRICE_PREFIX_RE.match(cleaned)
    if not match:
        return 0.0
    try:
        return float(match.group(0))
    except ValueError:
        return 0.0
