"""Tests for catalog_enrichment/pipeline.py"""

from contextlib import nullcontext
from dataclasses import replace
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from catalog_enrichment.models import Material, ProductEvent, StepKind
from catalog_enrichment.pipeline import EnrichmentPipeline
from catalog_enrichment.shopify.errors import ShopifyConnectionError


@pytest.fixture
def competitor():
    source = MagicMock()
    source.search_prices.return_value = [1, 50, 60, 70, 5000]
    return source


@pytest.fixture
def pipeline(settings, pricing_rules, seo_settings, fake_gateway, competitor):
    return EnrichmentPipeline(
        settings,
        pricing_rules=pricing_rules,
        seo_settings=seo_settings,
        gateway_factory=lambda: nullcontext(fake_gateway),
        competitor_factory=lambda: competitor,
    )


class TestEnrich:
    def test_moissanite_uses_ladder_without_lookup(self, pipeline, moissanite_event, competitor):
        result = pipeline.enrich(moissanite_event)

        assert result.attributes.material is Material.SILVER_WITH_GEMSTONE
        assert result.prices == {"9001": Decimal("329.99"), "9002": Decimal("349.99")}
        assert result.benchmark is None
        competitor.search_prices.assert_not_called()

    def test_steel_uses_benchmark(self, pipeline, steel_payload, competitor):
        result = pipeline.enrich(ProductEvent.from_payload(steel_payload))

        assert result.benchmark == Decimal("66.99")
        assert result.prices == {"9101": Decimal("66.99")}
        competitor.search_prices.assert_called_once_with("Stainless Steel Chain Bracelet")
        competitor.close.assert_called_once()

    def test_steel_fallback_without_competitor(self, settings, pricing_rules, seo_settings, steel_payload):
        pipeline = EnrichmentPipeline(settings, pricing_rules, seo_settings, competitor_factory=lambda: None)
        result = pipeline.enrich(ProductEvent.from_payload(steel_payload))

        assert result.benchmark is None
        assert result.prices == {"9101": Decimal("14.99")}

    def test_empty_sample_falls_back(self, pipeline, steel_payload, competitor):
        competitor.search_prices.return_value = []
        result = pipeline.enrich(ProductEvent.from_payload(steel_payload))
        assert result.prices == {"9101": Decimal("14.99")}

    def test_content_limits(self, pipeline, moissanite_event):
        result = pipeline.enrich(moissanite_event)

        assert len(result.seo.title) <= 60
        assert len(result.seo.description) <= 160
        assert "<img" not in result.description_html
        assert "<figure" not in result.description_html
        assert result.alt_text.endswith("by DTP Jewelry")

    def test_minimal_event(self, pipeline):
        result = pipeline.enrich(ProductEvent.from_payload({"id": 1}))
        assert result.attributes.material is Material.ALLOY_WITH_STONE
        assert result.prices == {}

    def test_reenriching_own_output_converges(self, pipeline, moissanite_event):
        first = pipeline.enrich(moissanite_event)
        second = pipeline.enrich(replace(moissanite_event, body_html=first.description_html))

        assert second.description_html == first.description_html
        assert second.attributes == first.attributes
        assert second.seo == first.seo
        assert second.prices == first.prices
        assert "Sparkling moissanite stones in a classic tennis setting." in second.description_html


class TestProcess:
    def test_writes_everything(self, pipeline, moissanite_event, fake_gateway):
        report = pipeline.process(moissanite_event)

        assert report.success
        assert fake_gateway.prices == {"9001": Decimal("329.99"), "9002": Decimal("349.99")}
        assert fake_gateway.metafields[("gid://shopify/Product/8001", "dtp", "material")] == "silver-with-gemstone"
        assert "moissanite" in fake_gateway.tags
        assert fake_gateway.images["501"].endswith("by DTP Jewelry")

    def test_rerun_leaves_same_state(self, pipeline, moissanite_event, fake_gateway):
        pipeline.process(moissanite_event)
        first = (fake_gateway.seo, fake_gateway.body_html, fake_gateway.tags, dict(fake_gateway.prices))

        pipeline.process(moissanite_event)

        assert (fake_gateway.seo, fake_gateway.body_html, fake_gateway.tags, dict(fake_gateway.prices)) == first

    def test_variant_fallback(self, pipeline, moissanite_event, fake_gateway):
        fake_gateway.not_found_variants = {"9002"}

        report = pipeline.process(moissanite_event)

        assert report.success
        assert len(fake_gateway.calls_to("update_variant_price_graphql")) == 1
        assert [o.used_fallback for o in report.outcomes_for(StepKind.VARIANT_PRICE)] == [False, True]

    def test_connection_error_propagates(self, pipeline, moissanite_event, fake_gateway):
        fake_gateway.failures["update_product_seo"] = ShopifyConnectionError("down")
        with pytest.raises(ShopifyConnectionError):
            pipeline.process(moissanite_event)
