from __future__ import annotations

import re


_WHITESPACE = re.compile(r"\s+")
_DISTRICT = re.compile(r"^([A-Z]{1,2}\d{1,2}[A-Z]?)")
_FULL_UK_POSTCODE = re.compile(r"^[A-Z]{1,2}[0-9][A-Z0-9]?\s?[0-9][A-Z]{2}$", re.IGNORECASE)
_TRAILING_DIGITS = re.compile(r"\d+$")
_LEADING_LETTERS = re.compile(r"^[A-Z]+")
_FIRST_DIGIT = re.compile(r"\d")


def normalize_postcode(postcode: str) -> str:
    """'  sm1   1aa ' -> 'SM1 1AA'"""
    return _WHITESPACE.sub(" ", postcode.strip().upper())


def extract_district(postcode: str) -> str:
    """
    Outward code of a UK postcode ('SM1 1AA' -> 'SM1', 'SW19' -> 'SW19').
    Falls back to the first whitespace-delimited token when the pattern does not match.
    """
    normalized = normalize_postcode(postcode)
    candidate = normalized
    if " " not in normalized and is_full_uk_postcode(normalized):
        # "SM11AA": strip the inward code so the pattern cannot swallow its digit
        candidate = normalized[:-3]
    match = _DISTRICT.match(candidate)
    if match:
        return match.group(1)
    return normalized.split(" ")[0] if normalized else ""


def is_full_uk_postcode(postcode: str) -> bool:
    return bool(_FULL_UK_POSTCODE.match(postcode.strip()))


def format_postcode(postcode: str) -> str:
    """Display form with a single space before the inward code ('sm11aa' -> 'SM1 1AA')."""
    compact = normalize_postcode(postcode).replace(" ", "")
    if len(compact) <= 4:
        return compact
    return f"{compact[:-3]} {compact[-3:]}"


def district_lookup_keys(district: str) -> list[str]:
    """
    Keys to try, most specific first, when looking a district up in the distance table:
    the district itself, then its trailing number cut to one digit ('CM11' -> 'CM1'),
    then letters plus first digit ('SW1A' -> 'SW1').
    """
    if not district:
        return []
    keys = [district]
    shorter = _TRAILING_DIGITS.sub(lambda match: match.group(0)[0], district)
    letters = _LEADING_LETTERS.match(district)
    digit = _FIRST_DIGIT.search(district)
    minimal = (letters.group(0) if letters else "") + (digit.group(0) if digit else "")
    for key in (shorter, minimal):
        if key and key not in keys:
            keys.append(key)
    return keys
