"""
Text classification of product attributes.

Modules:
    vocabulary      - Keyword patterns (gemstones, materials, types, styles)
    text_classifier - Pure inference functions and the classify() entry point
"""

from .text_classifier import (
    classify,
    infer_collections,
    infer_gemstone,
    infer_length_mm,
    infer_material,
    infer_product_type,
    infer_tags,
    merge_tags,
)

__all__ = [
    'classify',
    'infer_collections',
    'infer_gemstone',
    'infer_length_mm',
    'infer_material',
    'infer_product_type',
    'infer_tags',
    'merge_tags',
]
