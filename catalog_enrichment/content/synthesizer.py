"""
Content Synthesizer

Builds the SEO title/meta description, the storefront description HTML
and image alt text from classified attributes. Output never carries
image or figure markup: source descriptions are reduced to escaped
text before reuse.
"""

from html import escape
from typing import Any, Dict, List, Optional

from ..common.config_loader import load_seo_settings
from ..common.text_utils import (
    ENRICHED_ATTR,
    SOURCE_BLOCK,
    collapse_whitespace,
    html_to_paragraphs,
    truncate_on_whitespace,
)
from ..models import InferredAttributes, Material, ProductType, SeoContent

MM_PER_INCH = 25.4
ALT_TEXT_MAX_LENGTH = 125
SOURCE_PARAGRAPH_LIMIT = 3
SOURCE_PARAGRAPH_MAX_LENGTH = 400

_DEFAULT_HOOKS = {
    "sparkle": "{gemstone} brilliance that catches the light from every angle.",
    "vintage": "Vintage-inspired detailing with timeless appeal.",
    "generic": "Made to last, designed for everyday wear.",
}

_VINTAGE_TAGS = ("vintage", "palace")

_GENERATED = f'{ENRICHED_ATTR}="generated"'
_SOURCE = f'{ENRICHED_ATTR}="{SOURCE_BLOCK}"'


def derive_alt_text(seo_title: str, brand: str) -> str:
    """Image alt text: SEO title plus a brand suffix (not repeated)."""
    base = collapse_whitespace(seo_title)
    suffix = f"by {brand}"
    if not base:
        base = brand
    elif not base.endswith(suffix):
        # A truncated title may end in a partial suffix ("... by DTP")
        words = suffix.split()
        for n in range(len(words) - 1, 0, -1):
            partial = " " + " ".join(words[:n])
            if base.endswith(partial):
                base = base[: -len(partial)].rstrip(" |-,")
                break
        base = f"{base} {suffix}" if base else brand
    return truncate_on_whitespace(base, ALT_TEXT_MAX_LENGTH)


def format_length(mm: int) -> str:
    """Render a chain length as "457mm (18″)"; inches keep one decimal when needed."""
    inches = round(mm / MM_PER_INCH, 1)
    if inches == int(inches):
        inches_text = str(int(inches))
    else:
        inches_text = f"{inches:.1f}"
    return f"{mm}mm ({inches_text}″)"


class ContentSynthesizer:
    """
    Generates SEO fields and description HTML.

    Usage:
        synthesizer = ContentSynthesizer()
        seo = synthesizer.synthesize_seo(attrs.clean_title, attrs.material,
                                         attrs.product_type, attrs.gemstone)
        html = synthesizer.synthesize_description(attrs, source_html)
    """

    def __init__(self, seo_settings: Optional[Dict[str, Any]] = None):
        """
        Initialize the synthesizer.

        Args:
            seo_settings: Parsed seo_settings.yaml (loaded from config/ if None)
        """
        settings = seo_settings if seo_settings is not None else load_seo_settings()
        self.brand = settings.get("brand_name", "DTP Jewelry")
        self.title_max_length = int(settings.get("title_max_length", 60))
        self.description_max_length = int(settings.get("description_max_length", 160))
        self.hooks = {**_DEFAULT_HOOKS, **(settings.get("hooks") or {})}
        self.care_instructions = collapse_whitespace(settings.get("care_instructions", ""))

    # ── SEO ─────────────────────────────────────────────────────────────

    def _hook(self, gemstone: Optional[str], tags) -> str:
        if gemstone:
            return self.hooks["sparkle"].format(gemstone=gemstone)
        if any(t in _VINTAGE_TAGS for t in tags):
            return self.hooks["vintage"]
        return self.hooks["generic"]

    def synthesize_seo(
        self,
        clean_title: str,
        material: Material,
        product_type: ProductType,
        gemstone: Optional[str] = None,
        tags=(),
    ) -> SeoContent:
        """
        Build the SEO title and meta description.

        Title: "{title} | {gemstone }{material} {type} by {brand}"
        Description: "{title} — {type} crafted in {gemstone }{material}. {hook}"

        Both are truncated on a whitespace boundary to their max length.
        """
        stone = f"{gemstone} " if gemstone else ""
        descriptor = f"{stone}{material.label} {product_type.label} by {self.brand}"
        title = f"{clean_title} | {descriptor}" if clean_title else descriptor

        lead = f"{clean_title} — " if clean_title else ""
        description = (
            f"{lead}{product_type.label} crafted in {stone}{material.label}. "
            f"{self._hook(gemstone, tags)}"
        )

        return SeoContent(
            title=truncate_on_whitespace(title, self.title_max_length),
            description=truncate_on_whitespace(description, self.description_max_length),
        )

    def alt_text(self, seo_title: str) -> str:
        return derive_alt_text(seo_title, self.brand)

    # ── Description ────────────────────────────────────────────────────

    def _benefits(self, attrs: InferredAttributes) -> List[str]:
        bullets = []
        if attrs.gemstone:
            bullets.append(
                f"Carefully selected {attrs.gemstone} with a brilliant, lasting finish"
            )
        if attrs.material.is_silver:
            bullets.append("Hypoallergenic 925 sterling silver, gentle on sensitive skin")
        if attrs.product_type.is_necklace_family:
            bullets.append("Designed to layer beautifully with your favourite chains")
        if not bullets:
            bullets.append("Versatile design that moves from everyday wear to special occasions")
        bullets.append("Arrives gift-ready, the perfect present for someone special")
        return bullets

    def _details(self, attrs: InferredAttributes) -> List[str]:
        details = [
            f"<strong>Type:</strong> {escape(attrs.product_type.label)}",
            f"<strong>Material:</strong> {escape(attrs.material.label)}",
        ]
        if attrs.gemstone:
            details.append(f"<strong>Stone:</strong> {escape(attrs.gemstone)}")
        lengths = attrs.distinct_lengths
        if lengths:
            rendered = ", ".join(format_length(mm) for mm in lengths)
            details.append(f"<strong>Available lengths:</strong> {escape(rendered)}")
        return details

    def synthesize_description(self, attrs: InferredAttributes, source_html: str = "") -> str:
        """
        Build the full description HTML.

        Sections: lead paragraph, "Why You'll Love It" bullets, an
        optional "About This Piece" section reusing the source text
        (media stripped, escaped), details list and care instructions.
        Every block is tagged with a data-enriched attribute; passing a
        previous output back in as source_html reuses only its "About
        This Piece" paragraphs, so the output is unchanged.

        Args:
            attrs: Classified attributes
            source_html: Original product description, may contain media

        Returns:
            Description HTML with no image/figure markup
        """
        type_label = attrs.product_type.label.lower()
        stone = f", set with {attrs.gemstone}" if attrs.gemstone else ""
        if attrs.clean_title:
            lead = f"Meet the {attrs.clean_title}: a {type_label} crafted in {attrs.material.label}{stone}."
        else:
            lead = f"A {type_label} crafted in {attrs.material.label}{stone}."

        parts = [f"<p {_GENERATED}>{escape(lead)}</p>"]

        parts.append(f"<h3 {_GENERATED}>Why You'll Love It</h3>")
        parts.append(f"<ul {_GENERATED}>")
        for bullet in self._benefits(attrs):
            parts.append(f"<li>{escape(bullet)}</li>")
        parts.append("</ul>")

        paragraphs = html_to_paragraphs(source_html)[:SOURCE_PARAGRAPH_LIMIT]
        if paragraphs:
            parts.append(f"<h3 {_GENERATED}>About This Piece</h3>")
            for paragraph in paragraphs:
                text = truncate_on_whitespace(paragraph, SOURCE_PARAGRAPH_MAX_LENGTH)
                parts.append(f"<p {_SOURCE}>{escape(text)}</p>")

        parts.append(f"<h3 {_GENERATED}>Details</h3>")
        parts.append(f"<ul {_GENERATED}>")
        for detail in self._details(attrs):
            parts.append(f"<li>{detail}</li>")
        parts.append("</ul>")

        if self.care_instructions:
            parts.append(f"<h3 {_GENERATED}>Care Instructions</h3>")
            parts.append(f"<p {_GENERATED}>{escape(self.care_instructions)}</p>")

        return "\n".join(parts)
