#!/usr/bin/env python3
"""
Single Product Enrichment

Runs the enrichment pipeline for one product, from a saved webhook
payload or straight from the store, and prints a report.

Usage:
    # Preview from a saved webhook body, no writes
    python3 scripts/enrich_single.py --payload payload.json --dry-run

    # Enrich a live product
    python3 scripts/enrich_single.py --product-id 8123456789

    Set SHOPIFY_SHOP / SHOPIFY_ACCESS_TOKEN (and optionally SERPAPI_KEY)
    in the environment or a .env file.
"""

import argparse
import json
import logging
import os
import sys

# Add project root to path for proper package imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from catalog_enrichment.common import load_settings, setup_logging
from catalog_enrichment.content import format_length
from catalog_enrichment.models import OutcomeReport, ProductEvent
from catalog_enrichment.pipeline import EnrichmentPipeline, EnrichmentResult, shopify_gateway
from catalog_enrichment.shopify import ShopifyAPIError, ShopifyConnectionError

logger = logging.getLogger("catalog_enrichment.scripts.enrich_single")


def print_enrichment(event: ProductEvent, result: EnrichmentResult):
    """Print computed attributes, prices and content."""
    attrs = result.attributes

    print("\n" + "=" * 80)
    print("ENRICHMENT")
    print("=" * 80)
    print(f"\nProduct: {event.title} ({event.id})")
    print(f"  Material:     {attrs.material.value}")
    print(f"  Gemstone:     {attrs.gemstone or '-'}")
    print(f"  Type:         {attrs.product_type.label}")
    print(f"  Benchmark:    {result.benchmark if result.benchmark is not None else '-'}")

    print(f"\nTAGS ({len(attrs.tags)}):")
    print(f"  {', '.join(attrs.tags)}")

    print(f"\nCOLLECTIONS ({len(attrs.collections)}):")
    for title in attrs.collections:
        print(f"  - {title}")

    print(f"\nVARIANT PRICES ({len(result.prices)}):")
    for variant in event.variants:
        mm = attrs.lengths_mm.get(variant.id)
        length = format_length(mm) if mm else "no length"
        print(f"  {variant.id:>16}  {result.prices.get(variant.id)!s:>8}  {variant.title or '-'} [{length}]")

    print("\nSEO:")
    print(f"  Title ({len(result.seo.title)}):       {result.seo.title}")
    print(f"  Description ({len(result.seo.description)}): {result.seo.description}")
    print(f"  Image alt:        {result.alt_text}")

    print("\nDESCRIPTION HTML:")
    print(result.description_html)


def print_report(report: OutcomeReport):
    """Print per-step outcomes."""
    print("\n" + "-" * 80)
    print("UPDATE STEPS")
    print("-" * 80)
    for outcome in report.outcomes:
        marker = " (fallback)" if outcome.used_fallback else ""
        required = " [required]" if outcome.required else ""
        print(f"  [{outcome.status.value.upper():7}] {outcome.kind.value:22} {outcome.target}"
              f"{required}{marker} {outcome.detail}")

    print("\n" + "=" * 80)
    print(f"RESULT: {'SUCCESS' if report.success else 'FAILED'}")
    print("=" * 80)


def load_event(args, settings) -> ProductEvent:
    """Build the event from --payload or by fetching --product-id."""
    if args.payload:
        with open(args.payload, "r", encoding="utf-8") as f:
            return ProductEvent.from_payload(json.load(f))

    with shopify_gateway(settings) as gateway:
        product = gateway.fetch_product(args.product_id)
    if not product:
        raise ValueError(f"Product {args.product_id} not found")
    return ProductEvent.from_payload(product)


def main():
    parser = argparse.ArgumentParser(
        description="Enrich a single product (SEO, description, tags, prices)"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--payload", help="Path to a saved products/create webhook body")
    source.add_argument("--product-id", help="Numeric product id to fetch from the store")
    parser.add_argument("--dry-run", action="store_true", help="Compute and print, write nothing")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", "-q", action="store_true", help="Warnings and errors only")

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        settings = load_settings()
        pipeline = EnrichmentPipeline(settings)
        event = load_event(args, settings)
    except (OSError, ValueError, ShopifyAPIError, ShopifyConnectionError) as e:
        logger.error("%s", e)
        sys.exit(1)

    if args.dry_run:
        print_enrichment(event, pipeline.enrich(event))
        print("\n  DRY RUN - nothing was written")
        return

    try:
        report = pipeline.process(event)
    except ShopifyConnectionError as e:
        logger.error("Aborted: %s", e)
        sys.exit(1)

    print_report(report)
    sys.exit(0 if report.success else 1)


if __name__ == "__main__":
    main()
