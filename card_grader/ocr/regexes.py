"""Regex patterns for card text heuristics."""

import re
from typing import Optional

from ..core.constants import RARITY_KEYWORDS, TYPE_KEYWORDS

COPYRIGHT_MARK = "©"

# Three or more consecutive digits rule a line out as a name
DIGIT_RUN_PATTERN = re.compile(r"\d{3,}")
NAME_EXCLUDE_PATTERN = re.compile(r"set|series", re.IGNORECASE)

FRACTION_NUMBER_PATTERN = re.compile(r"(\d+)\s*/\s*(\d+)")
BARE_NUMBER_PATTERN = re.compile(r"\d+")
NUMBER_EXCLUDE_PATTERN = re.compile(r"year|season", re.IGNORECASE)

SET_PATTERN = re.compile(r"(?:\bset\b|\bseries\b|©)[\s:\-]*(.*)", re.IGNORECASE)

TYPE_PATTERN = re.compile(
    r"\b(" + "|".join(re.escape(k) for k in TYPE_KEYWORDS) + r")\b", re.IGNORECASE
)
RARITY_PATTERNS = [
    (keyword, re.compile(r"\b" + re.escape(keyword) + r"\b", re.IGNORECASE))
    for keyword in RARITY_KEYWORDS
]


def is_name_candidate(line: str) -> bool:
    """
    Check whether a line could be the card name.

    Examples:
        >>> is_name_candidate("Charizard")
        True
        >>> is_name_candidate("© 1999 Wizards")
        False
        >>> is_name_candidate("Base Set")
        False
    """
    if len(line) <= 3:
        return False
    if COPYRIGHT_MARK in line:
        return False
    if DIGIT_RUN_PATTERN.search(line):
        return False
    return NAME_EXCLUDE_PATTERN.search(line) is None


def parse_card_number(line: str) -> Optional[str]:
    """
    Parse a card number from a single line.

    A ``digits/digits`` form wins over a bare digit run anywhere on the line.
    Lines mentioning a year or season never supply a number.

    Examples:
        >>> parse_card_number("45 / 100")
        '45/100'
        >>> parse_card_number("No. 12")
        '12'
        >>> parse_card_number("Season 2019") is None
        True
    """
    if NUMBER_EXCLUDE_PATTERN.search(line):
        return None

    fraction = FRACTION_NUMBER_PATTERN.search(line)
    if fraction:
        return f"{fraction.group(1)}/{fraction.group(2)}"

    bare = BARE_NUMBER_PATTERN.search(line)
    if bare:
        return bare.group(0)
    return None


def parse_set_name(line: str) -> Optional[str]:
    """
    Parse the set from a line introduced by "set", "series" or a copyright mark.

    Examples:
        >>> parse_set_name("Set: Base Set")
        'Base Set'
        >>> parse_set_name("Base Set") is None
        True
    """
    match = SET_PATTERN.search(line)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def parse_card_type(line: str) -> Optional[str]:
    match = TYPE_PATTERN.search(line)
    if match:
        return match.group(1).title()
    return None


def parse_rarity(line: str) -> Optional[str]:
    for keyword, pattern in RARITY_PATTERNS:
        if pattern.search(line):
            return keyword.title()
    return None
