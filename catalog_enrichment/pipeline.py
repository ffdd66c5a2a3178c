"""
Enrichment Pipeline

One product-creation event in, one outcome report out:

    classify -> price (optionally benchmarked) -> synthesize content -> apply

The pipeline itself holds only immutable configuration, so a single
instance can serve concurrent events. Each event gets its own API
session and competitor lookup session.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, ContextManager, Dict, Optional

from .classification import classify
from .common.config_loader import load_pricing_rules, load_seo_settings
from .common.settings import Settings
from .common.text_utils import html_to_text
from .content import ContentSynthesizer
from .models import InferredAttributes, Material, OutcomeReport, PricingRules, ProductEvent, SeoContent
from .orchestration import UpdateOrchestrator
from .pricing import CompetitorPriceSource, benchmark_price, price_variants
from .shopify import ShopifyAPIClient, ShopifyGateway

logger = logging.getLogger(__name__)

DESCRIPTION_TEXT_MAX_LENGTH = 1000


@dataclass(frozen=True)
class EnrichmentResult:
    """Everything computed for one event before any write is issued."""
    attributes: InferredAttributes
    benchmark: Optional[Decimal]
    prices: Dict[str, Decimal]
    seo: SeoContent
    description_html: str
    alt_text: str


@contextmanager
def shopify_gateway(settings: Settings):
    """Open a per-event API session and yield a gateway bound to it."""
    with ShopifyAPIClient(settings.shop, settings.access_token, timeout=settings.request_timeout) as client:
        yield ShopifyGateway(client)


class EnrichmentPipeline:
    """
    Webhook-triggered product enrichment.

    Usage:
        pipeline = EnrichmentPipeline(load_settings())
        report = pipeline.process(ProductEvent.from_payload(body))
    """

    def __init__(
        self,
        settings: Settings,
        pricing_rules: Optional[PricingRules] = None,
        seo_settings: Optional[Dict[str, Any]] = None,
        gateway_factory: Optional[Callable[[], ContextManager[Any]]] = None,
        competitor_factory: Optional[Callable[[], Optional[CompetitorPriceSource]]] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            settings: Process settings
            pricing_rules: Price rules (loaded from config/pricing.yaml if None)
            seo_settings: SEO settings (loaded from config/seo_settings.yaml if None)
            gateway_factory: Returns a context manager yielding a gateway per event
            competitor_factory: Returns a competitor source per event, or None
        """
        self.settings = settings
        self.pricing_rules = pricing_rules or load_pricing_rules()
        self.seo_settings = seo_settings if seo_settings is not None else load_seo_settings()
        self.synthesizer = ContentSynthesizer(self.seo_settings)
        self._gateway_factory = gateway_factory or (lambda: shopify_gateway(self.settings))
        self._competitor_factory = competitor_factory or self._default_competitor_source

    def _default_competitor_source(self) -> Optional[CompetitorPriceSource]:
        if not self.settings.competitor_pricing_enabled:
            return None
        return CompetitorPriceSource(self.settings.serpapi_key, timeout=self.settings.request_timeout)

    @staticmethod
    def _needs_benchmark(event: ProductEvent, attributes: InferredAttributes) -> bool:
        """False when every variant is priced off the length ladder anyway."""
        if not event.variants:
            return False
        if attributes.material is not Material.SILVER_WITH_GEMSTONE:
            return True
        return not all(attributes.lengths_mm.get(v.id) for v in event.variants)

    def _lookup_benchmark(self, query: str) -> Optional[Decimal]:
        source = self._competitor_factory()
        if source is None:
            return None
        try:
            prices = source.search_prices(query)
        finally:
            source.close()
        benchmark = benchmark_price(prices, self.pricing_rules)
        if benchmark is None:
            logger.info("No usable competitor sample for %r (%d raw prices)", query, len(prices))
        else:
            logger.info("Competitor benchmark for %r: %s from %d prices", query, benchmark, len(prices))
        return benchmark

    def enrich(self, event: ProductEvent) -> EnrichmentResult:
        """
        Compute attributes, prices and content for an event.

        Never raises for missing text; the competitor lookup degrades to
        "no benchmark" on any failure.
        """
        description_text = html_to_text(event.body_html, DESCRIPTION_TEXT_MAX_LENGTH)
        attributes = classify(
            event.title,
            description_text,
            event.existing_tags,
            event.product_type,
            event.variants,
        )

        benchmark = None
        if self._needs_benchmark(event, attributes):
            benchmark = self._lookup_benchmark(attributes.clean_title or event.title)

        prices = price_variants(
            attributes.material,
            attributes.lengths_mm,
            benchmark,
            self.pricing_rules,
            variant_ids=[v.id for v in event.variants],
        )

        seo = self.synthesizer.synthesize_seo(
            attributes.clean_title,
            attributes.material,
            attributes.product_type,
            attributes.gemstone,
            attributes.tags,
        )
        description_html = self.synthesizer.synthesize_description(attributes, event.body_html)

        return EnrichmentResult(
            attributes=attributes,
            benchmark=benchmark,
            prices=prices,
            seo=seo,
            description_html=description_html,
            alt_text=self.synthesizer.alt_text(seo.title),
        )

    def process(self, event: ProductEvent) -> OutcomeReport:
        """
        Enrich an event and apply the result to the platform.

        Returns:
            OutcomeReport (success iff the required SEO write succeeded)

        Raises:
            ShopifyConnectionError: If the platform is unreachable
        """
        logger.info("New product: %s (%s)", event.title or "<untitled>", event.id)
        result = self.enrich(event)

        with self._gateway_factory() as gateway:
            orchestrator = UpdateOrchestrator(
                gateway,
                brand=self.synthesizer.brand,
                metafield=self.seo_settings.get("material_metafield"),
                deadline_seconds=self.settings.event_deadline,
            )
            report = orchestrator.apply(
                event,
                result.attributes,
                result.seo,
                result.description_html,
                result.prices,
            )

        logger.info(
            "Updated %r | material=%s | tags=%d | collections=%d | %s",
            event.title,
            result.attributes.material.value,
            len(result.attributes.tags),
            len(result.attributes.collections),
            "ok" if report.success else "FAILED",
        )
        for line in report.diagnostics:
            logger.warning("  %s", line)
        return report
