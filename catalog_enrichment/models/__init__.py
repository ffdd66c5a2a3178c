"""
Data models for product enrichment.

This module contains pure data classes with no business logic.
"""

from .enrichment import (
    InferredAttributes,
    LadderTier,
    Material,
    OutcomeReport,
    PricingRules,
    ProductType,
    SeoContent,
    StepKind,
    StepOutcome,
    StepStatus,
    UpdateStep,
)
from .product import ProductEvent, ProductImage, VariantRef

__all__ = [
    'ProductEvent',
    'ProductImage',
    'VariantRef',
    'InferredAttributes',
    'LadderTier',
    'Material',
    'OutcomeReport',
    'PricingRules',
    'ProductType',
    'SeoContent',
    'StepKind',
    'StepOutcome',
    'StepStatus',
    'UpdateStep',
]
