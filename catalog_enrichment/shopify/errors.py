"""
Shopify API error taxonomy.

ShopifyAPIError
├── ShopifyNotFoundError     HTTP 404 (drives the variant price fallback)
├── ShopifyGraphQLError      top-level GraphQL "errors"
└── ShopifyUserError         non-empty mutation "userErrors"
ShopifyConnectionError       platform unreachable; aborts an orchestration run
"""

from typing import Any, Dict, List, Optional


class ShopifyAPIError(Exception):
    """A platform call failed. Recorded per step; never retried."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ShopifyNotFoundError(ShopifyAPIError):
    """The addressed resource does not exist under this API path."""

    def __init__(self, message: str):
        super().__init__(message, status_code=404)


class ShopifyGraphQLError(ShopifyAPIError):
    """The GraphQL endpoint rejected the request as a whole."""

    def __init__(self, errors: List[Any]):
        super().__init__(f"GraphQL errors: {errors}")
        self.errors = errors


class ShopifyUserError(ShopifyAPIError):
    """A mutation ran but reported user errors."""

    def __init__(self, operation: str, user_errors: List[Dict[str, Any]]):
        messages = "; ".join(
            f"{'.'.join(e.get('field') or []) or '-'}: {e.get('message', '')}"
            for e in user_errors
        )
        super().__init__(f"{operation} user errors: {messages}")
        self.operation = operation
        self.user_errors = user_errors


class ShopifyConnectionError(Exception):
    """The platform could not be reached at all."""
