"""
Jewelry Catalog Enrichment

Modules:
    models         - Data models (ProductEvent, InferredAttributes, OutcomeReport)
    common         - Shared utilities (settings, config loader, logging, text utils)
    classification - Material/gemstone/type/tag inference from product text
    pricing        - Price engine and competitor price lookup
    content        - SEO fields and description HTML
    shopify        - Shopify Admin API client and platform gateway
    orchestration  - Update plan and step-by-step orchestrator
    pipeline       - End-to-end enrichment of one product event
    webhook        - FastAPI webhook receiver
"""
