"""
Shopify API Client

Thin transport for the Shopify Admin API (REST and GraphQL).
Handles authentication, rate limiting, throttling and error mapping.
"""

import logging
import math
import time
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

from .errors import (
    ShopifyAPIError,
    ShopifyConnectionError,
    ShopifyGraphQLError,
    ShopifyNotFoundError,
)

logger = logging.getLogger(__name__)


def _retry_delay(header: Optional[str], attempt: int) -> float:
    """Seconds to wait before retrying; an absent or non-numeric Retry-After backs off exponentially."""
    try:
        delay = float(header)
    except (TypeError, ValueError):
        return float(2 ** attempt)
    if not math.isfinite(delay):
        return float(2 ** attempt)
    return max(delay, 0.0)


class ShopifyAPIClient:
    """
    Client for the Shopify Admin API.

    Handles:
    - Authentication
    - Rate limiting (2 requests/second)
    - Throttling (HTTP 429 honours Retry-After)
    - Mapping failures onto the error taxonomy in errors.py
    - Both REST and GraphQL endpoints

    Only HTTP 429 is retried. Every other failure is raised straight
    away so that callers decide what, if anything, to fall back to.

    Usage:
        client = ShopifyAPIClient(shop="my-store", access_token="shpat_xxx")

        # REST request
        result = client.rest_request("PUT", "products/123.json", {"product": {...}})

        # GraphQL request
        result = client.graphql_request(query, variables)
    """

    API_VERSION = "2025-01"
    MAX_RETRIES = 5
    THROTTLE_STATUS_CODE = 429

    def __init__(self, shop: str, access_token: str, timeout: float = 15.0):
        """
        Initialize the API client.

        Args:
            shop: Shop name (without .myshopify.com) or full domain
            access_token: Shopify Admin API access token
            timeout: Per-request timeout in seconds
        """
        # Normalize shop name
        if ".myshopify.com" in shop:
            self.shop = shop.replace("https://", "").replace("http://", "").split(".myshopify.com")[0]
        else:
            self.shop = shop

        self.access_token = access_token
        self.timeout = timeout
        self.base_url = f"https://{self.shop}.myshopify.com/admin/api/{self.API_VERSION}"
        self.graphql_url = f"{self.base_url}/graphql.json"

        self.session = requests.Session()
        self.session.headers.update({
            "X-Shopify-Access-Token": access_token,
            "Content-Type": "application/json",
        })

        # Rate limiting
        self.requests_made = 0
        self.last_request_time = 0.0
        self.min_request_interval = 0.5  # 2 req/sec

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _rate_limit(self):
        """Implement rate limiting (2 requests/second max)."""
        now = time.time()
        elapsed = now - self.last_request_time

        if elapsed < self.min_request_interval:
            time.sleep(self.min_request_interval - elapsed)

        self.last_request_time = time.time()
        self.requests_made += 1

    def _send(self, method: str, url: str, label: str, json: Optional[Dict] = None) -> requests.Response:
        """
        Send one request, waiting out throttling responses.

        Raises:
            ShopifyConnectionError: If the shop cannot be reached
            ShopifyAPIError: On timeout or when throttling never clears
        """
        for attempt in range(self.MAX_RETRIES):
            self._rate_limit()

            try:
                response = self.session.request(method, url, json=json, timeout=self.timeout)
            except requests.exceptions.Timeout:
                logger.error("Request timeout: %s %s", method, label)
                raise ShopifyAPIError(f"Timeout after {self.timeout}s on {method} {label}") from None
            except requests.exceptions.ConnectionError as e:
                logger.error("Connection failed: %s", e)
                raise ShopifyConnectionError(f"Cannot reach {self.shop}: {e}") from e
            except requests.exceptions.RequestException as e:
                logger.error("Request failed: %s", e)
                raise ShopifyAPIError(f"Request failed on {method} {label}: {e}") from e

            if response.status_code == self.THROTTLE_STATUS_CODE:
                retry_after = _retry_delay(response.headers.get("Retry-After"), attempt)
                logger.warning("HTTP 429 on %s, retry %d/%d in %.1fs...",
                               label, attempt + 1, self.MAX_RETRIES, retry_after)
                time.sleep(retry_after)
                continue

            return response

        logger.error("Max retries (%d) exceeded for %s %s", self.MAX_RETRIES, method, label)
        raise ShopifyAPIError(f"Throttled on {method} {label}", status_code=self.THROTTLE_STATUS_CODE)

    def rest_request(self, method: str, endpoint: str, data: Optional[Dict] = None) -> Dict[str, Any]:
        """
        Make a REST API request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint (e.g., "products/123.json")
            data: Request body for POST/PUT

        Returns:
            Response JSON ({} for an empty body)

        Raises:
            ValueError: On an unsupported method
            ShopifyNotFoundError: On HTTP 404
            ShopifyAPIError: On any other HTTP error or a body that is not a JSON object
            ShopifyConnectionError: If the shop cannot be reached
        """
        if method not in ("GET", "POST", "PUT", "DELETE"):
            raise ValueError(f"Unsupported method: {method}")

        url = urljoin(self.base_url + "/", endpoint)
        response = self._send(method, url, endpoint, json=data)

        if response.status_code == 404:
            logger.debug("Not found: %s %s", method, endpoint)
            raise ShopifyNotFoundError(f"{method} {endpoint}: not found")

        if response.status_code >= 400:
            error_msg = response.text[:200]
            logger.error("API Error %d: %s", response.status_code, error_msg)
            raise ShopifyAPIError(f"{method} {endpoint}: HTTP {response.status_code} {error_msg}",
                                  status_code=response.status_code)

        if not response.content:
            return {}
        try:
            result = response.json()
        except ValueError:
            raise ShopifyAPIError(f"{method} {endpoint}: response is not JSON",
                                  status_code=response.status_code) from None
        if not isinstance(result, dict):
            raise ShopifyAPIError(f"{method} {endpoint}: response is not a JSON object",
                                  status_code=response.status_code)
        return result

    def graphql_request(self, query: str, variables: Optional[Dict] = None) -> Dict[str, Any]:
        """
        Make a GraphQL API request.

        Args:
            query: GraphQL query or mutation
            variables: Query variables

        Returns:
            Response data (without 'data' wrapper)

        Raises:
            ShopifyGraphQLError: If the response carries top-level errors
            ShopifyAPIError: On HTTP errors or a body that is not a JSON object
            ShopifyConnectionError: If the shop cannot be reached
        """
        payload = {"query": query}
        if variables:
            payload["variables"] = variables

        response = self._send("POST", self.graphql_url, "GraphQL", json=payload)

        if response.status_code >= 400:
            logger.error("API Error %d: %s", response.status_code, response.text[:200])
            raise ShopifyAPIError(f"GraphQL: HTTP {response.status_code} {response.text[:200]}",
                                  status_code=response.status_code)

        try:
            result = response.json()
        except ValueError:
            raise ShopifyAPIError("GraphQL response is not JSON", status_code=response.status_code) from None
        if not isinstance(result, dict):
            raise ShopifyAPIError("GraphQL response is not a JSON object", status_code=response.status_code)

        if result.get("errors"):
            logger.error("GraphQL Errors: %s", result["errors"])
            raise ShopifyGraphQLError(result["errors"])

        data = result.get("data") or {}
        if not isinstance(data, dict):
            raise ShopifyAPIError("GraphQL data is not a JSON object", status_code=response.status_code)
        return data

    def test_connection(self) -> bool:
        """
        Test API connection by fetching shop info.

        Returns:
            True if connection successful
        """
        try:
            result = self.rest_request("GET", "shop.json")
        except (ShopifyAPIError, ShopifyConnectionError) as e:
            logger.error("Connection test failed: %s", e)
            return False
        if "shop" in result:
            shop_name = result["shop"].get("name", "Unknown")
            logger.info("Connected to: %s", shop_name)
            return True
        return False
