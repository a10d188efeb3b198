"""Address normalization and lightweight gu/dong extraction.

Everything here is a heuristic over Korean street/lot addresses. There is no
gazetteer behind it: two spellings of one place can still produce different
keys, and an unlucky lot-number token can be read as a district.
"""
import re
from typing import Optional

from intake.services.regions import Granularity

_WHITESPACE_RE = re.compile(r"\s+")
_PUNCT_RE = re.compile(r"[.,]")
_COUNTRY_RE = re.compile(r"(?<!\S)(?:대한민국|한국)(?!\S)")
_METRO_SUFFIX_RE = re.compile(r"(?:특별|광역)+시")
_HYPHEN_RE = re.compile(r"\s*-\s*")
_NON_DIGIT_RE = re.compile(r"[^\d]")
_PRICE_RE = re.compile(r"[^\d.-]")

DISTRICT_SUFFIX = "구"
SUBDISTRICT_SUFFIXES = ("동", "읍", "면", "리")

STATUS_ALIASES = {
    "active": "active",
    "진행": "active",
    "진행중": "active",
    "진행중인": "active",
    "hold": "hold",
    "보류": "hold",
    "closed": "closed",
    "종결": "closed",
    "완료": "closed",
    "review": "review",
    "검토": "review",
    "검토중": "review",
}

PROPERTY_SOURCES = ("auction", "public", "general")


def collapse_whitespace(value: Optional[str]) -> str:
    """Collapse whitespace runs to a single space and trim the ends."""
    return _WHITESPACE_RE.sub(" ", value or "").strip()


def normalize_address(raw: Optional[str]) -> str:
    """Build the comparison key used to detect duplicate properties.

    Examples:
        normalize_address("서울특별시 강남구 역삼동 123 - 4.")
            -> "서울시 강남구 역삼동 123-4"
    """
    text = collapse_whitespace(raw)
    text = _PUNCT_RE.sub("", text)
    text = _COUNTRY_RE.sub("", text)
    text = _METRO_SUFFIX_RE.sub("시", text)
    text = _HYPHEN_RE.sub("-", text)
    text = text.lower()
    # Removals above can leave doubled or edge spaces behind.
    return collapse_whitespace(text)


def extract_district_and_subdistrict(address: Optional[str]) -> tuple[str, str]:
    """Return the first "...구" token and the first "...동/읍/면/리" token.

    Either value is an empty string when no token matches.
    """
    tokens = collapse_whitespace(address).split(" ")
    district = next((t for t in tokens if t.endswith(DISTRICT_SUFFIX)), "")
    subdistrict = next((t for t in tokens if t.endswith(SUBDISTRICT_SUFFIXES)), "")
    return district, subdistrict


def region_key(granularity: Granularity, district: str, subdistrict: str = "") -> str:
    """Canonical key for a district or a district + sub-district pair."""
    if Granularity(granularity) is Granularity.SUBDISTRICT:
        return collapse_whitespace(f"{district or ''} {subdistrict or ''}")
    return collapse_whitespace(district)


def normalize_phone(value: Optional[str]) -> str:
    return _NON_DIGIT_RE.sub("", str(value or ""))


def normalize_status(value: Optional[str]) -> str:
    """Map free-form status labels (Korean or English) onto the status set."""
    return STATUS_ALIASES.get(str(value or "").strip().lower(), "review")


def normalize_source(value: Optional[str], default: str = "auction") -> str:
    source = str(value or "").strip().lower()
    return source if source in PROPERTY_SOURCES else default


def parse_price(value) -> int:
    """Parse "1,250,000,000원" style prices; anything unparseable becomes 0."""
    if isinstance(value, (int, float)):
        return int(value)
    cleaned = _PRICE_RE.sub("", str(value or ""))
    try:
        return int(float(cleaned))
    except (ValueError, OverflowError):
        return 0
