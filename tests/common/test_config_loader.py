"""Tests for catalog_enrichment/common/config_loader.py"""

from decimal import Decimal

import pytest

from catalog_enrichment.common.config_loader import (
    load_config,
    load_pricing_rules,
    load_seo_settings,
    parse_pricing_rules,
)
from catalog_enrichment.models import Material


@pytest.fixture
def pricing_config():
    return {
        "window": {"min": 6.99, "max": 499.99},
        "fallback_prices": {m.value: 9.99 for m in Material},
        "length_ladder": [
            {"max_mm": 460, "price": 329.99},
            {"max_mm": None, "price": 369.99},
        ],
        "benchmark": {"min_price": 2, "max_price": 2000, "markup": 1.1},
    }


class TestLoadConfig:
    def test_missing_file_raises(self):
        with pytest.raises(FileNotFoundError):
            load_config("no_such_file.yaml")

    def test_loads_pricing_yaml(self):
        config = load_config("pricing.yaml")
        assert "window" in config
        assert "fallback_prices" in config


class TestParsePricingRules:
    def test_values_are_exact_decimals(self, pricing_config):
        rules = parse_pricing_rules(pricing_config)
        assert rules.window_min == Decimal("6.99")
        assert rules.window_max == Decimal("499.99")
        assert rules.benchmark_markup == Decimal("1.1")

    def test_open_ended_last_tier(self, pricing_config):
        rules = parse_pricing_rules(pricing_config)
        assert rules.length_ladder[0].max_mm == 460
        assert rules.length_ladder[-1].max_mm is None

    def test_fallback_keyed_by_material(self, pricing_config):
        rules = parse_pricing_rules(pricing_config)
        assert set(rules.fallback_prices) == set(Material)

    def test_inverted_window_raises(self, pricing_config):
        pricing_config["window"] = {"min": 100, "max": 10}
        with pytest.raises(ValueError, match="inverted"):
            parse_pricing_rules(pricing_config)

    def test_missing_fallback_raises(self, pricing_config):
        del pricing_config["fallback_prices"]["steel"]
        with pytest.raises(ValueError, match="steel"):
            parse_pricing_rules(pricing_config)

    def test_empty_ladder_raises(self, pricing_config):
        pricing_config["length_ladder"] = []
        with pytest.raises(ValueError, match="ladder"):
            parse_pricing_rules(pricing_config)


class TestShippedConfig:
    def test_pricing_rules(self):
        rules = load_pricing_rules()
        assert rules.fallback_prices[Material.STEEL] == Decimal("14.99")
        assert rules.fallback_prices[Material.SILVER_WITH_GEMSTONE] == Decimal("329.99")
        assert [t.price for t in rules.length_ladder] == [
            Decimal("329.99"), Decimal("349.99"), Decimal("369.99"),
        ]

    def test_seo_settings(self):
        settings = load_seo_settings()
        assert settings["brand_name"] == "DTP Jewelry"
        assert settings["title_max_length"] == 60
        assert settings["description_max_length"] == 160
        assert settings["material_metafield"]["namespace"] == "dtp"
        assert "{gemstone}" in settings["hooks"]["sparkle"]
