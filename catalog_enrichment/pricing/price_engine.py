"""
Price Engine

Pure price computation: chain-length ladder for silver pieces set with
a gemstone, then competitor benchmark, then a per-material fallback.
Every price leaves through apply_rounding_policy(), so it always ends
in .99 and lies inside the configured window.
"""

import statistics
from decimal import ROUND_FLOOR, Decimal
from typing import Iterable, Mapping, Optional, Sequence, Union

from ..models import Material, PricingRules

Number = Union[int, float, Decimal, str]

_CENTS_99 = Decimal("0.99")
_WHOLE = Decimal("1")


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def apply_rounding_policy(value: Number, rules: PricingRules) -> Decimal:
    """
    Clamp to the window, floor to a whole unit and add 0.99.

    The floor keeps values that already end in .99 unchanged, and the
    whole part is bounded by the floors of the window edges so that the
    result never leaves [window_min, window_max].

    Args:
        value: Raw price
        rules: Pricing rules (window)

    Returns:
        Price as Decimal with fractional part .99
    """
    clamped = min(max(_to_decimal(value), rules.window_min), rules.window_max)
    whole = clamped.quantize(_WHOLE, rounding=ROUND_FLOOR)

    lowest = rules.window_min.quantize(_WHOLE, rounding=ROUND_FLOOR)
    highest = (rules.window_max - _CENTS_99).quantize(_WHOLE, rounding=ROUND_FLOOR)
    if whole + _CENTS_99 < rules.window_min:
        whole = lowest + _WHOLE
    whole = min(whole, highest)

    return whole + _CENTS_99


def filter_sample(prices: Iterable[Number], rules: PricingRules) -> list:
    """Drop non-numeric values and outliers outside (benchmark_min, benchmark_max)."""
    kept = []
    for price in prices:
        try:
            value = _to_decimal(price)
        except (ArithmeticError, ValueError, TypeError):
            continue
        if not value.is_finite():
            continue
        if rules.benchmark_min < value < rules.benchmark_max:
            kept.append(value)
    return kept


def benchmark_price(prices: Iterable[Number], rules: PricingRules) -> Optional[Decimal]:
    """
    Derive a benchmark from observed competitor prices.

    Filters outliers, takes the median of the remaining sample, applies
    the markup and the rounding policy.

    Args:
        prices: Raw observed prices (any order, may contain outliers)
        rules: Pricing rules (filter bounds, markup, window)

    Returns:
        Benchmark price, or None if no usable sample remains
    """
    sample = filter_sample(prices, rules)
    if not sample:
        return None
    median = statistics.median(sample)
    return apply_rounding_policy(median * rules.benchmark_markup, rules)


def ladder_price(length_mm: int, rules: PricingRules) -> Decimal:
    """Ladder tier price for a chain length (last tier for anything longer)."""
    for tier in rules.length_ladder:
        if tier.max_mm is None or length_mm <= tier.max_mm:
            return tier.price
    return rules.length_ladder[-1].price


def compute_price(
    material: Material,
    length_mm: Optional[int],
    benchmark: Optional[Decimal],
    rules: PricingRules,
) -> Decimal:
    """
    Recommended retail price for one variant.

    1. silver-with-gemstone and a known length -> length ladder
    2. a competitor benchmark is available    -> the benchmark
    3. otherwise                              -> fallback price for the material
    """
    if material is Material.SILVER_WITH_GEMSTONE and length_mm:
        raw = ladder_price(length_mm, rules)
    elif benchmark is not None:
        raw = benchmark
    else:
        raw = rules.fallback_prices[material]
    return apply_rounding_policy(raw, rules)


def price_variants(
    material: Material,
    lengths_mm: Mapping[str, Optional[int]],
    benchmark: Optional[Decimal],
    rules: PricingRules,
    variant_ids: Sequence[str] = (),
) -> dict:
    """
    Price every variant.

    Args:
        material: Inferred material
        lengths_mm: Variant id -> inferred chain length
        benchmark: Competitor benchmark or None
        rules: Pricing rules
        variant_ids: Variants to price (defaults to the keys of lengths_mm)

    Returns:
        Dict of variant id -> Decimal price, in variant order
    """
    ids = list(variant_ids) or list(lengths_mm)
    return {
        vid: compute_price(material, lengths_mm.get(vid), benchmark, rules)
        for vid in ids
    }
