"""OCR package for card text recognition and metadata extraction."""

from .engine import OCREngine, TesseractEngine, recognize_text
from .extract import TextExtractor, merge_card_details, split_lines, text_extractor
from .regexes import (
    is_name_candidate,
    parse_card_number,
    parse_card_type,
    parse_rarity,
    parse_set_name,
)

__all__ = [
    "OCREngine",
    "TesseractEngine",
    "recognize_text",
    "TextExtractor",
    "text_extractor",
    "merge_card_details",
    "split_lines",
    "is_name_candidate",
    "parse_card_number",
    "parse_card_type",
    "parse_rarity",
    "parse_set_name",
]
