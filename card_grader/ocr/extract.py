"""Heuristic extraction of card metadata from recognized text."""

from dataclasses import replace
from typing import Callable, Iterable, List, Optional, Union

from ..core.constants import SPORTS_KEYWORDS, TRADING_KEYWORDS, UNKNOWN
from ..core.types import CardCategory, CardDetails
from ..utils.log import LoggerMixin
from .regexes import (
    is_name_candidate,
    parse_card_number,
    parse_card_type,
    parse_rarity,
    parse_set_name,
)

TextInput = Union[str, Iterable[str], None]

NAME_SEARCH_LINES = 3


def split_lines(text: TextInput) -> List[str]:
    """Trim lines and drop empty ones, keeping their order."""
    if not text:
        return []
    raw_lines = text.splitlines() if isinstance(text, str) else text
    return [line.strip() for line in raw_lines if line and line.strip()]


def _first_match(lines: Iterable[str], parser: Callable[[str], Optional[str]]) -> str:
    for line in lines:
        value = parser(line)
        if value:
            return value
    return UNKNOWN


class TextExtractor(LoggerMixin):
    """Applies ordered line heuristics to populate CardDetails."""

    def extract(self, text: TextInput) -> CardDetails:
        """
        Extract card metadata from one side's recognized text.

        Each field is resolved independently; the first matching line wins.
        Empty text is legitimate and yields all-unknown details.

        Args:
            text: Newline separated text or an iterable of lines

        Returns:
            CardDetails with unresolved fields left at the "Unknown" sentinel
        """
        lines = split_lines(text)
        if not lines:
            self.logger.debug("No text to extract from")
            return CardDetails()

        details = CardDetails(
            name=self.extract_name(lines),
            set=_first_match(lines, parse_set_name),
            number=_first_match(lines, parse_card_number),
            type=_first_match(lines, parse_card_type),
            rarity=_first_match(lines, parse_rarity),
            category=self.classify(lines),
        )

        self.logger.debug(
            "Text extraction completed",
            line_count=len(lines),
            name=details.name,
            number=details.number,
            set=details.set,
            category=details.category.value,
        )
        return details

    def extract_name(self, lines: List[str]) -> str:
        for line in lines[:NAME_SEARCH_LINES]:
            if is_name_candidate(line):
                return line
        return UNKNOWN

    def classify(self, lines: TextInput) -> CardCategory:
        """Sports keywords are checked before trading-card keywords."""
        block = "\n".join(split_lines(lines)).lower()
        if any(keyword in block for keyword in SPORTS_KEYWORDS):
            return CardCategory.SPORTS
        if any(keyword in block for keyword in TRADING_KEYWORDS):
            return CardCategory.TRADING
        return CardCategory.UNSET


def _known(value: str) -> bool:
    return bool(value) and value != UNKNOWN


def merge_card_details(front: CardDetails, back: Optional[CardDetails]) -> CardDetails:
    """
    Combine front and back passes into a new CardDetails.

    Number and set from the back replace the front's only when the back found
    a value. Name and category always come from the front. Type and rarity
    are filled from the back only where the front has none.
    """
    if back is None:
        return replace(front)

    return replace(
        front,
        number=back.number if _known(back.number) else front.number,
        set=back.set if _known(back.set) else front.set,
        type=front.type if _known(front.type) else back.type,
        rarity=front.rarity if _known(front.rarity) else back.rarity,
    )


# Global singleton
text_extractor = TextExtractor()
