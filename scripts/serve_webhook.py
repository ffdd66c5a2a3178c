#!/usr/bin/env python3
"""
Webhook Server

Serves POST /webhook/products/create with uvicorn.

Usage:
    python3 scripts/serve_webhook.py
    python3 scripts/serve_webhook.py --port 8080 --check
"""

import argparse
import logging
import os
import sys

import uvicorn

# Add project root to path for proper package imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from catalog_enrichment.common import load_settings, setup_logging
from catalog_enrichment.shopify import ShopifyAPIClient
from catalog_enrichment.webhook import app

logger = logging.getLogger("catalog_enrichment.scripts.serve_webhook")


def main():
    parser = argparse.ArgumentParser(description="Run the product enrichment webhook server")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    parser.add_argument("--port", type=int, help="Port (default: $PORT or 3000)")
    parser.add_argument("--check", action="store_true", help="Verify Shopify credentials before serving")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = parser.parse_args()
    setup_logging(verbose=args.verbose)

    try:
        settings = load_settings()
    except ValueError as e:
        logger.error("%s", e)
        sys.exit(1)

    if args.check:
        with ShopifyAPIClient(settings.shop, settings.access_token, timeout=settings.request_timeout) as client:
            if not client.test_connection():
                logger.error("Shopify credentials rejected for %s", settings.shop)
                sys.exit(1)

    if not settings.competitor_pricing_enabled:
        logger.info("SERPAPI_KEY not set, competitor benchmark disabled")

    port = args.port or settings.port
    logger.info("Webhook server running on %s:%d", args.host, port)
    uvicorn.run(app, host=args.host, port=port, log_level="debug" if args.verbose else "info")


if __name__ == "__main__":
    main()
