"""
Product event models.

Validated representation of the product-creation webhook payload.
Loose JSON is converted once at the boundary; everything downstream
works with these immutable dataclasses.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

PRODUCT_GID_PREFIX = "gid://shopify/Product/"
VARIANT_GID_PREFIX = "gid://shopify/ProductVariant/"


def _id_from_gid(gid: str, prefix: str) -> str:
    if gid and gid.startswith(prefix):
        return gid[len(prefix):]
    return ""


def _as_text(value: Any) -> str:
    """Coerce a loose JSON scalar to a stripped string (None -> "")."""
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class ProductImage:
    """Product image as listed by the platform."""
    id: str
    alt_text: str = ""
    position: int = 0


@dataclass(frozen=True)
class VariantRef:
    """Variant identifiers plus the option strings that may carry a size."""
    id: str
    graphql_id: str
    title: str = ""
    option1: str = ""
    option2: str = ""
    option3: str = ""

    @property
    def size_strings(self) -> List[str]:
        """Size-bearing strings in lookup order (title, then options)."""
        return [s for s in (self.title, self.option1, self.option2, self.option3) if s]

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> Optional["VariantRef"]:
        """Build a variant from webhook JSON; returns None when it carries no id."""
        variant_id = _as_text(data.get("id"))
        graphql_id = _as_text(data.get("admin_graphql_api_id"))

        if not variant_id:
            variant_id = _id_from_gid(graphql_id, VARIANT_GID_PREFIX)
        if not graphql_id and variant_id:
            graphql_id = f"{VARIANT_GID_PREFIX}{variant_id}"

        if not variant_id:
            return None

        return cls(
            id=variant_id,
            graphql_id=graphql_id,
            title=_as_text(data.get("title")),
            option1=_as_text(data.get("option1")),
            option2=_as_text(data.get("option2")),
            option3=_as_text(data.get("option3")),
        )


@dataclass(frozen=True)
class ProductEvent:
    """
    Inbound product-creation event.

    Only the product identifier is mandatory. Every other field defaults
    to an empty value so that classification can fall back to its
    documented defaults instead of failing.
    """
    id: str
    graphql_id: str
    title: str = ""
    body_html: str = ""
    tags: str = ""
    product_type: str = ""
    variants: Tuple[VariantRef, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Validate required fields after initialization."""
        if not self.id or not self.graphql_id:
            raise ValueError("Product identifier is required")

    @property
    def existing_tags(self) -> List[str]:
        """Comma-joined tag string split into stripped, non-empty tags."""
        return [t.strip() for t in self.tags.split(",") if t.strip()]

    @classmethod
    def from_payload(cls, payload: Any) -> "ProductEvent":
        """
        Validate a raw webhook body into a ProductEvent.

        Args:
            payload: Decoded JSON body of the webhook delivery

        Returns:
            ProductEvent

        Raises:
            ValueError: If the body is not an object or carries no product id
        """
        if not isinstance(payload, dict):
            raise ValueError("Product payload must be a JSON object")

        product_id = _as_text(payload.get("id"))
        graphql_id = _as_text(payload.get("admin_graphql_api_id"))

        # Either identifier form is enough; derive the other one
        if not product_id:
            product_id = _id_from_gid(graphql_id, PRODUCT_GID_PREFIX)
        if not graphql_id and product_id:
            graphql_id = f"{PRODUCT_GID_PREFIX}{product_id}"

        tags = payload.get("tags") or ""
        if isinstance(tags, list):
            tags = ", ".join(_as_text(t) for t in tags)

        raw_variants = payload.get("variants")
        variants = []
        if isinstance(raw_variants, list):
            for item in raw_variants:
                if isinstance(item, dict):
                    variant = VariantRef.from_payload(item)
                    if variant is not None:
                        variants.append(variant)

        return cls(
            id=product_id,
            graphql_id=graphql_id,
            title=_as_text(payload.get("title")),
            body_html=_as_text(payload.get("body_html")),
            tags=_as_text(tags),
            product_type=_as_text(payload.get("product_type")),
            variants=tuple(variants),
        )
