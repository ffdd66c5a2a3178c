"""
Configuration Loader

Loads YAML business-rule files (pricing rules, SEO settings) from the
repository's config/ directory.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import yaml

from ..models import LadderTier, Material, PricingRules


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'pricing.yaml')

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def _money(value: Any) -> Decimal:
    # str() first so 6.99 stays 6.99 rather than its binary expansion
    return Decimal(str(value))


def parse_pricing_rules(config: Dict[str, Any]) -> PricingRules:
    """
    Build PricingRules from the parsed pricing.yaml structure.

    Raises:
        ValueError: If the window is inverted, the ladder is empty or
            a material has no fallback price
    """
    window = config.get('window', {})
    window_min = _money(window.get('min', '6.99'))
    window_max = _money(window.get('max', '499.99'))
    if window_min > window_max:
        raise ValueError(f"Price window is inverted: {window_min} > {window_max}")

    raw_fallbacks = config.get('fallback_prices', {})
    fallback_prices = {}
    for material in Material:
        if material.value not in raw_fallbacks:
            raise ValueError(f"No fallback price for material: {material.value}")
        fallback_prices[material] = _money(raw_fallbacks[material.value])

    ladder = tuple(
        LadderTier(
            max_mm=int(tier['max_mm']) if tier.get('max_mm') is not None else None,
            price=_money(tier['price']),
        )
        for tier in config.get('length_ladder', [])
    )
    if not ladder:
        raise ValueError("Length ladder must have at least one tier")

    benchmark = config.get('benchmark', {})

    return PricingRules(
        window_min=window_min,
        window_max=window_max,
        fallback_prices=fallback_prices,
        length_ladder=ladder,
        benchmark_min=_money(benchmark.get('min_price', 2)),
        benchmark_max=_money(benchmark.get('max_price', 2000)),
        benchmark_markup=_money(benchmark.get('markup', '1.10')),
    )


@lru_cache(maxsize=None)
def load_pricing_rules() -> PricingRules:
    """
    Load price rules.

    Returns:
        PricingRules with window, fallback table, ladder and benchmark filter

    Example (pricing.yaml):
        window: {min: 6.99, max: 499.99}
        fallback_prices: {steel: 14.99, ...}
        length_ladder: [{max_mm: 460, price: 329.99}, ...]
    """
    return parse_pricing_rules(load_config('pricing.yaml'))


def load_seo_settings() -> Dict[str, Any]:
    """
    Load SEO settings configuration.

    Returns:
        Dictionary with brand name, title/description limits, material
        metafield definition, description hooks and care copy.
    """
    return load_config('seo_settings.yaml')
