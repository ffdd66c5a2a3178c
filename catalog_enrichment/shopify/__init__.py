"""
Shopify integration modules.

Modules:
    api_client - REST/GraphQL transport for the Shopify Admin API
    errors     - Error taxonomy raised by the transport and gateway
    gateway    - Platform write operations used by the update orchestrator
"""

from .api_client import ShopifyAPIClient
from .errors import (
    ShopifyAPIError,
    ShopifyConnectionError,
    ShopifyGraphQLError,
    ShopifyNotFoundError,
    ShopifyUserError,
)
from .gateway import ShopifyGateway, format_price

__all__ = [
    # API Client
    'ShopifyAPIClient',
    # Gateway
    'ShopifyGateway',
    'format_price',
    # Errors
    'ShopifyAPIError',
    'ShopifyConnectionError',
    'ShopifyGraphQLError',
    'ShopifyNotFoundError',
    'ShopifyUserError',
]
