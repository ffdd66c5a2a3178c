"""
Text Classifier

Infers material, gemstone, product type, tags, collections and chain
lengths from a product's free text. Every function here is pure and
total: a missing signal yields a documented default, never an error.
"""

from typing import Iterable, List, Optional, Sequence

from ..common.text_utils import clean_title
from ..models import InferredAttributes, Material, ProductType, VariantRef
from . import vocabulary as vocab


def _join(*parts: Optional[str]) -> str:
    return " ".join(p for p in parts if p)


def infer_gemstone(text: str) -> Optional[str]:
    """
    Return the first gemstone named in the text, normalized.

    Abbreviations and spelling variants collapse to one canonical name
    ("cz" -> "Cubic Zirconia", "tigers eye" -> "Tiger's Eye").

    Returns:
        Canonical gemstone name, or None if no gemstone is named
    """
    if not text:
        return None
    for name, pattern in vocab.GEMSTONES:
        if pattern.search(text):
            return name
    return None


def infer_material(text: str) -> Material:
    """
    Infer the material family. First matching rule wins:

    1. gemstone named AND (925 purity marker OR "sterling") -> silver-with-gemstone
    2. purity marker OR "sterling silver"                  -> plain-silver
    3. "stainless"                                          -> steel
    4. gemstone, stone, crystal, alloy or plating keyword   -> alloy-with-stone
    5. "gold tone" / "gold-tone"                            -> gold-tone
    6. anything else                                        -> alloy-with-stone
    """
    text = text or ""
    has_purity = bool(vocab.PURITY_MARKER.search(text))
    gemstone = infer_gemstone(text)

    if gemstone and (has_purity or vocab.STERLING.search(text)):
        return Material.SILVER_WITH_GEMSTONE
    if has_purity or vocab.STERLING_SILVER.search(text):
        return Material.PLAIN_SILVER
    if vocab.STAINLESS.search(text):
        return Material.STEEL
    if gemstone or vocab.STONE_OR_ALLOY.search(text):
        return Material.ALLOY_WITH_STONE
    if vocab.GOLD_TONE.search(text):
        return Material.GOLD_TONE
    return Material.ALLOY_WITH_STONE


def infer_product_type(*texts: str) -> ProductType:
    """
    Scan texts in the given priority order for a product-type keyword.

    Within one text the keyword list order decides (bracelet before
    ring, tennis/pendant/chain necklaces before plain necklace). Falls
    back to ProductType.GENERIC ("Jewelry").
    """
    for text in texts:
        if not text:
            continue
        for product_type, patterns in vocab.PRODUCT_TYPES:
            if all(p.search(text) for p in patterns):
                return product_type
    return ProductType.GENERIC


def infer_tags(
    text: str,
    material: Material,
    product_type: ProductType,
    gemstone: Optional[str],
) -> List[str]:
    """Build the inferred tag list (always includes the base and gift tags)."""
    text = text or ""
    tags = [vocab.BASE_TAG]
    tags.extend(vocab.CATEGORY_TAGS[product_type])

    if material.is_silver:
        tags.extend(["s925", "sterling-silver"])
    elif material is Material.STEEL:
        tags.append("stainless-steel")
    elif material is Material.GOLD_TONE:
        tags.append("gold-tone")

    if gemstone:
        tags.append(gemstone.lower().replace("'", "").replace(" ", "-"))
        tags.append("gemstone")
    if vocab.CRYSTAL_OR_STONE.search(text):
        tags.extend(["crystal", "stone"])

    for pattern, style_tags in vocab.STYLE_TAGS:
        if pattern.search(text):
            tags.extend(style_tags)

    tags.append(vocab.GIFT_TAG)
    return list(dict.fromkeys(tags))


def merge_tags(existing: Iterable[str], inferred: Iterable[str]) -> List[str]:
    """
    Case-sensitive union of existing and inferred tags.

    Order is first-seen: existing tags keep their position, new tags
    follow in inference order.
    """
    merged = [t.strip() for t in existing if t and t.strip()]
    merged.extend(t for t in inferred if t)
    return list(dict.fromkeys(merged))


def infer_collections(tags: Sequence[str], product_type: ProductType, gemstone: Optional[str]) -> List[str]:
    """
    Collection titles the product belongs in.

    Collections are pre-provisioned in the store; titles here that do
    not exist are skipped at update time.
    """
    collections = []
    category = vocab.CATEGORY_COLLECTIONS.get(product_type)
    if category:
        collections.append(category)
    if gemstone:
        collections.append(f"{gemstone} Jewelry")
    if "crystal" in tags:
        collections.extend(["Crystal Jewelry", "Spiritual Jewelry"])
    elif "spiritual" in tags:
        collections.append("Spiritual Jewelry")
    if "mens" in tags or "unisex" in tags:
        collections.append("Men's Jewelry")
    return list(dict.fromkeys(collections))


def infer_length_mm(strings: Iterable[str]) -> Optional[int]:
    """
    Parse a chain length in millimeters from size-bearing strings.

    Patterns in priority order, the first that matches any string wins:
    explicit mm in [400, 599], explicit cm in [40, 59] (x10), inches in
    [16, 22] (x25.4, rounded to the nearest mm).

    Returns:
        Length in mm, or None if no string states one
    """
    strings = [s for s in strings if s]

    for s in strings:
        match = vocab.LENGTH_MM.search(s)
        if match:
            return int(match.group(1))
    for s in strings:
        match = vocab.LENGTH_CM.search(s)
        if match:
            return int(match.group(1)) * 10
    for s in strings:
        match = vocab.LENGTH_INCH.search(s)
        if match:
            return int(round(int(match.group(1)) * vocab.MM_PER_INCH))
    return None


def classify(
    title: str,
    description_text: str,
    existing_tags: Sequence[str] = (),
    product_type: str = "",
    variants: Sequence[VariantRef] = (),
) -> InferredAttributes:
    """
    Classify a product from its text.

    Args:
        title: Product title as created on the platform
        description_text: Plain-text description (HTML already stripped)
        existing_tags: Tags already on the product
        product_type: Platform product type field (may be empty)
        variants: Variants whose option strings may carry a chain length

    Returns:
        InferredAttributes (material is always set)
    """
    title = title or ""
    tag_text = " ".join(existing_tags)
    text = _join(title, description_text, tag_text)

    gemstone = infer_gemstone(text)
    material = infer_material(text)
    kind = infer_product_type(product_type, title, description_text, tag_text)
    inferred = infer_tags(text, material, kind, gemstone)
    tags = merge_tags(existing_tags, inferred)

    return InferredAttributes(
        material=material,
        product_type=kind,
        gemstone=gemstone,
        tags=tuple(tags),
        collections=tuple(infer_collections(inferred, kind, gemstone)),
        lengths_mm={v.id: infer_length_mm(v.size_strings) for v in variants},
        clean_title=clean_title(title),
    )
