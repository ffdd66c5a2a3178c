"""
Enrichment data models.

Pure data classes for derived attributes, pricing rules, SEO content,
update plans and the per-step outcome report. No business logic -
only data structure definitions.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple


class Material(str, Enum):
    """Inferred material family. Every product maps to exactly one."""
    SILVER_WITH_GEMSTONE = "silver-with-gemstone"
    PLAIN_SILVER = "plain-silver"
    STEEL = "steel"
    GOLD_TONE = "gold-tone"
    ALLOY_WITH_STONE = "alloy-with-stone"

    @property
    def label(self) -> str:
        return _MATERIAL_LABELS[self]

    @property
    def is_silver(self) -> bool:
        return self in (Material.SILVER_WITH_GEMSTONE, Material.PLAIN_SILVER)


_MATERIAL_LABELS = {
    Material.SILVER_WITH_GEMSTONE: "925 Sterling Silver",
    Material.PLAIN_SILVER: "925 Sterling Silver",
    Material.STEEL: "Stainless Steel",
    Material.GOLD_TONE: "Gold-Tone",
    Material.ALLOY_WITH_STONE: "Alloy",
}


class ProductType(str, Enum):
    """Inferred product type."""
    NECKLACE = "necklace"
    BRACELET = "bracelet"
    RING = "ring"
    EARRINGS = "earrings"
    PENDANT_NECKLACE = "pendant-necklace"
    CHAIN_NECKLACE = "chain-necklace"
    TENNIS_NECKLACE = "tennis-necklace"
    ANKLET = "anklet"
    CHOKER = "choker"
    GENERIC = "generic"

    @property
    def label(self) -> str:
        if self is ProductType.GENERIC:
            return "Jewelry"
        return self.value.replace("-", " ").title()

    @property
    def is_necklace_family(self) -> bool:
        return self in (
            ProductType.NECKLACE,
            ProductType.PENDANT_NECKLACE,
            ProductType.CHAIN_NECKLACE,
            ProductType.TENNIS_NECKLACE,
            ProductType.CHOKER,
        )


@dataclass(frozen=True)
class InferredAttributes:
    """Attributes derived from a product's text. Never persisted on their own."""
    material: Material
    product_type: ProductType
    gemstone: Optional[str] = None
    tags: Tuple[str, ...] = ()
    collections: Tuple[str, ...] = ()
    # Variant id -> chain length in millimeters (None when not stated)
    lengths_mm: Mapping[str, Optional[int]] = field(default_factory=dict)
    clean_title: str = ""

    @property
    def distinct_lengths(self) -> List[int]:
        """Sorted, de-duplicated lengths across all variants."""
        return sorted({mm for mm in self.lengths_mm.values() if mm})


@dataclass(frozen=True)
class LadderTier:
    """One step of the chain-length ladder (max_mm None = open-ended)."""
    max_mm: Optional[int]
    price: Decimal


@dataclass(frozen=True)
class PricingRules:
    """Price rules loaded from config/pricing.yaml."""
    window_min: Decimal
    window_max: Decimal
    fallback_prices: Mapping[Material, Decimal]
    length_ladder: Tuple[LadderTier, ...]
    benchmark_min: Decimal
    benchmark_max: Decimal
    benchmark_markup: Decimal


@dataclass(frozen=True)
class SeoContent:
    """Search engine title and meta description."""
    title: str
    description: str


class StepKind(str, Enum):
    """Kinds of mutation issued against the platform, in execution order."""
    SEO = "seo"
    DESCRIPTION = "description"
    TAGS = "tags"
    VARIANT_PRICE = "variant-price"
    METAFIELD = "metafield"
    COLLECTION = "collection-membership"
    IMAGE_ALT = "image-alt"


class StepStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class UpdateStep:
    """One idempotent mutation targeting a single entity."""
    kind: StepKind
    target: str
    payload: Dict[str, Any] = field(default_factory=dict)
    required: bool = False


@dataclass
class StepOutcome:
    """Result of executing one UpdateStep."""
    kind: StepKind
    target: str
    status: StepStatus
    required: bool = False
    detail: str = ""
    used_fallback: bool = False

    @property
    def ok(self) -> bool:
        return self.status is StepStatus.OK


@dataclass
class OutcomeReport:
    """
    Overall result of one orchestration run.

    The run succeeds when every required step succeeded; failures of
    best-effort steps are kept as diagnostics only.
    """
    product_id: str
    outcomes: List[StepOutcome] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return all(o.ok for o in self.outcomes if o.required)

    @property
    def diagnostics(self) -> List[str]:
        """Human-readable lines for every failed step."""
        return [
            f"{o.kind.value}[{o.target}]: {o.detail}"
            for o in self.outcomes
            if o.status is StepStatus.FAILED
        ]

    def outcomes_for(self, kind: StepKind) -> List[StepOutcome]:
        return [o for o in self.outcomes if o.kind is kind]
