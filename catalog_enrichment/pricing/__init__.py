"""
Retail price computation.

Modules:
    price_engine - Ladder/benchmark/fallback pricing and the .99 rounding policy
    competitor   - SerpAPI Google Shopping price lookup
"""

from .competitor import CompetitorPriceSource
from .price_engine import (
    apply_rounding_policy,
    benchmark_price,
    compute_price,
    filter_sample,
    ladder_price,
    price_variants,
)

__all__ = [
    'CompetitorPriceSource',
    'apply_rounding_policy',
    'benchmark_price',
    'compute_price',
    'filter_sample',
    'ladder_price',
    'price_variants',
]
