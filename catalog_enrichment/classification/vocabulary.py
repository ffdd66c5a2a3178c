"""
Classification vocabulary.

Keyword patterns used by the text classifier. All patterns are
compiled case-insensitive with word boundaries; lists are ordered and
the first match wins wherever order matters.
"""

import re
from typing import List, Tuple

from ..models import ProductType


def _rx(pattern: str) -> "re.Pattern[str]":
    return re.compile(pattern, re.IGNORECASE)


# Canonical gemstone name -> pattern, in priority order.
# Multi-word forms come before their single-word suffixes (rose quartz, quartz).
GEMSTONES: List[Tuple[str, "re.Pattern[str]"]] = [
    ("Moissanite", _rx(r"\bmoissanite\b")),
    ("Amethyst", _rx(r"\bamethysts?\b")),
    ("Opal", _rx(r"\bopals?\b")),
    ("Agate", _rx(r"\bagates?\b")),
    ("Carnelian", _rx(r"\bcarnelians?\b")),
    ("Rose Quartz", _rx(r"\brose\s+quartz\b")),
    ("Quartz", _rx(r"\bquartz\b")),
    ("Tiger's Eye", _rx(r"\btiger(?:['’]?s)?[\s-]*eye\b")),
    ("Onyx", _rx(r"\bonyx\b")),
    ("Malachite", _rx(r"\bmalachite\b")),
    ("Turquoise", _rx(r"\bturquoise\b")),
    ("Zircon", _rx(r"\bzircons?\b")),
    ("Cubic Zirconia", _rx(r"\bcubic\s+zirconia\b|\bcz\b")),
    ("Crystal", _rx(r"\bcrystals?\b")),
    ("Garnet", _rx(r"\bgarnets?\b")),
    ("Ruby", _rx(r"\brub(?:y|ies)\b")),
    ("Sapphire", _rx(r"\bsapphires?\b")),
    ("Emerald", _rx(r"\bemeralds?\b")),
]

# Material markers
PURITY_MARKER = _rx(r"\bs?925\b")
STERLING = _rx(r"\bsterling\b")
STERLING_SILVER = _rx(r"\bsterling\s+silver\b")
STAINLESS = _rx(r"\bstainless\b")
GOLD_TONE = _rx(r"\bgold[\s-]?tone\b")
STONE_OR_ALLOY = _rx(
    r"\b(?:rhine)?stones?\b|\bcrystals?\b|\balloy\b|\bplat(?:ed|ing)\b"
)

# Product type, scanned in order; a type may need every one of its patterns
PRODUCT_TYPES: List[Tuple[ProductType, Tuple["re.Pattern[str]", ...]]] = [
    (ProductType.BRACELET, (_rx(r"\bbracelets?\b"),)),
    (ProductType.EARRINGS, (_rx(r"\bear-?rings?\b"),)),
    (ProductType.RING, (_rx(r"\brings?\b"),)),
    (ProductType.ANKLET, (_rx(r"\banklets?\b"),)),
    (ProductType.CHOKER, (_rx(r"\bchokers?\b"),)),
    (ProductType.TENNIS_NECKLACE, (_rx(r"\btennis\b"), _rx(r"\bnecklaces?\b"))),
    (ProductType.PENDANT_NECKLACE, (_rx(r"\bpendants?\b"),)),
    (ProductType.CHAIN_NECKLACE, (_rx(r"\bchains?\b"), _rx(r"\bnecklaces?\b"))),
    (ProductType.NECKLACE, (_rx(r"\bnecklaces?\b"),)),
]

CATEGORY_TAGS = {
    ProductType.NECKLACE: ("necklaces",),
    ProductType.PENDANT_NECKLACE: ("necklaces", "pendants"),
    ProductType.CHAIN_NECKLACE: ("necklaces", "chains"),
    ProductType.TENNIS_NECKLACE: ("necklaces",),
    ProductType.CHOKER: ("necklaces", "chokers"),
    ProductType.BRACELET: ("bracelets",),
    ProductType.RING: ("rings",),
    ProductType.EARRINGS: ("earrings",),
    ProductType.ANKLET: ("anklets",),
    ProductType.GENERIC: (),
}

CATEGORY_COLLECTIONS = {
    ProductType.NECKLACE: "Necklaces",
    ProductType.PENDANT_NECKLACE: "Necklaces",
    ProductType.CHAIN_NECKLACE: "Necklaces",
    ProductType.TENNIS_NECKLACE: "Necklaces",
    ProductType.CHOKER: "Chokers",
    ProductType.BRACELET: "Bracelets",
    ProductType.RING: "Rings",
    ProductType.EARRINGS: "Earrings",
    ProductType.ANKLET: "Anklets",
}

CRYSTAL_OR_STONE = _rx(
    r"\bcrystals?\b|\bstones?\b|\bquartz\b|\bagates?\b|\bopals?\b|\bamethysts?\b"
    r"|\bcarnelians?\b|\btiger(?:['’]?s)?[\s-]*eye\b"
)

# Style/motif/region/gender vocabulary: pattern -> tags it contributes
STYLE_TAGS: List[Tuple["re.Pattern[str]", Tuple[str, ...]]] = [
    (_rx(r"\bvintage\b|\bretro\b"), ("vintage",)),
    (_rx(r"\bpalace\b"), ("palace",)),
    (_rx(r"\beurop(?:e|ean)\b"), ("european",)),
    (_rx(r"\bital(?:y|ian)\b"), ("italian",)),
    (_rx(r"\bmedallions?\b"), ("medallion",)),
    (_rx(r"\bflor(?:al|a)\b|\bflowers?\b"), ("floral",)),
    (_rx(r"\bsun\s*burst\b"), ("sunburst",)),
    (_rx(r"\btennis\b"), ("tennis", "minimal")),
    (_rx(r"\btree\s+of\s+life\b"), ("tree-of-life", "spiritual")),
    (_rx(r"\bmen(?:['’]?s)?\b|\bmale\b"), ("mens",)),
    (_rx(r"\bwomen(?:['’]?s)?\b|\bladies\b|\bfemale\b"), ("womens",)),
    (_rx(r"\bunisex\b"), ("unisex",)),
]

BASE_TAG = "Jewelry"
GIFT_TAG = "gift"

# Chain length patterns, in priority order
LENGTH_MM = _rx(r"\b(4\d{2}|5\d{2})\s*mm\b")
LENGTH_CM = _rx(r"\b(4\d|5\d)\s*cm\b")
LENGTH_INCH = _rx(r"\b(1[6-9]|2[0-2])\s*(?:\"|″|''|inch(?:es)?\b|in\b)")
MM_PER_INCH = 25.4
