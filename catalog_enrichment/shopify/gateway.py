"""
Shopify Platform Gateway

The write operations the update orchestrator drives, mapped onto the
two Shopify wire protocols: REST resource mutation (addressed by
numeric id) and GraphQL mutation (addressed by global id).

Every method either returns normally or raises an error from
errors.py; nothing here retries or swallows failures.
"""

import json
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from ..models import ProductImage
from .api_client import ShopifyAPIClient
from .errors import ShopifyUserError

logger = logging.getLogger(__name__)


M_PRODUCT_UPDATE = """
mutation productUpdate($product: ProductUpdateInput!) {
  productUpdate(product: $product) {
    product { id }
    userErrors { field message }
  }
}
"""

M_VARIANTS_BULK_UPDATE = """
mutation productVariantsBulkUpdate($productId: ID!, $variants: [ProductVariantsBulkInput!]!) {
  productVariantsBulkUpdate(productId: $productId, variants: $variants) {
    productVariants { id price }
    userErrors { field message }
  }
}
"""

M_METAFIELDS_SET = """
mutation metafieldsSet($metafields: [MetafieldsSetInput!]!) {
  metafieldsSet(metafields: $metafields) {
    metafields { id }
    userErrors { field message }
  }
}
"""

Q_COLLECTIONS_BY_TITLE = """
query collectionsByTitle($q: String!) {
  collections(first: 5, query: $q) {
    nodes { id title }
  }
}
"""

Q_COLLECTION_HAS_PRODUCT = """
query collectionHasProduct($id: ID!, $productId: ID!) {
  collection(id: $id) {
    id
    hasProduct(id: $productId)
  }
}
"""

M_COLLECTION_ADD_PRODUCTS = """
mutation collectionAddProducts($id: ID!, $productIds: [ID!]!) {
  collectionAddProducts(id: $id, productIds: $productIds) {
    userErrors { field message }
  }
}
"""


def format_price(price: Decimal) -> str:
    """Two-decimal price string as the Admin API expects it."""
    return f"{Decimal(price):.2f}"


def _rest_id(value: str):
    """Numeric ids go out as integers, anything else unchanged."""
    return int(value) if str(value).isdigit() else value


def _raise_on_user_errors(data: Dict[str, Any], operation: str) -> Dict[str, Any]:
    payload = data.get(operation) or {}
    user_errors = payload.get("userErrors") or []
    if user_errors:
        raise ShopifyUserError(operation, user_errors)
    return payload


class ShopifyGateway:
    """
    Platform write operations used by the update orchestrator.

    Usage:
        with ShopifyAPIClient(shop, token) as client:
            gateway = ShopifyGateway(client)
            gateway.update_product_tags("123", ["gift", "necklaces"])
    """

    def __init__(self, client: ShopifyAPIClient):
        self.client = client

    # ── Product ────────────────────────────────────────────────────────

    def fetch_product(self, product_id: str) -> Dict[str, Any]:
        """Fetch a product in webhook-payload shape (REST)."""
        result = self.client.rest_request("GET", f"products/{product_id}.json")
        return result.get("product") or {}

    def update_product_seo(self, product_gid: str, title: str, description: str) -> None:
        """Set the SEO title and meta description (GraphQL only)."""
        data = self.client.graphql_request(M_PRODUCT_UPDATE, {
            "product": {
                "id": product_gid,
                "seo": {"title": title, "description": description},
            }
        })
        _raise_on_user_errors(data, "productUpdate")

    def update_product_description(self, product_id: str, body_html: str) -> None:
        """Overwrite the description HTML (REST)."""
        self.client.rest_request("PUT", f"products/{product_id}.json", {
            "product": {"id": _rest_id(product_id), "body_html": body_html}
        })

    def update_product_tags(self, product_id: str, tags: Sequence[str]) -> None:
        """Overwrite the full tag set (REST)."""
        self.client.rest_request("PUT", f"products/{product_id}.json", {
            "product": {"id": _rest_id(product_id), "tags": ", ".join(tags)}
        })

    # ── Variant price ──────────────────────────────────────────────────

    def update_variant_price_rest(self, variant_id: str, price: Decimal) -> None:
        """
        Set a variant price through the REST variant resource.

        Raises:
            ShopifyNotFoundError: If the variant is not addressable here
        """
        self.client.rest_request("PUT", f"variants/{variant_id}.json", {
            "variant": {"id": _rest_id(variant_id), "price": format_price(price)}
        })

    def update_variant_price_graphql(self, product_gid: str, variant_gid: str, price: Decimal) -> None:
        """Set a variant price through productVariantsBulkUpdate."""
        data = self.client.graphql_request(M_VARIANTS_BULK_UPDATE, {
            "productId": product_gid,
            "variants": [{"id": variant_gid, "price": format_price(price)}],
        })
        _raise_on_user_errors(data, "productVariantsBulkUpdate")

    # ── Metafield ──────────────────────────────────────────────────────

    def set_metafield(
        self,
        owner_gid: str,
        namespace: str,
        key: str,
        value: str,
        value_type: str = "single_line_text_field",
    ) -> None:
        """Create or overwrite one metafield (metafieldsSet upserts by namespace/key)."""
        data = self.client.graphql_request(M_METAFIELDS_SET, {
            "metafields": [{
                "ownerId": owner_gid,
                "namespace": namespace,
                "key": key,
                "value": value,
                "type": value_type,
            }]
        })
        _raise_on_user_errors(data, "metafieldsSet")

    # ── Collections ────────────────────────────────────────────────────

    def find_collection_by_title(self, title: str) -> Optional[str]:
        """
        Look up a collection by exact title.

        Returns:
            Collection global id, or None if no collection has that title
        """
        data = self.client.graphql_request(Q_COLLECTIONS_BY_TITLE, {"q": f"title:{json.dumps(title)}"})
        nodes = (data.get("collections") or {}).get("nodes") or []
        for node in nodes:
            # Search is fuzzy; only an exact title counts
            if node.get("title") == title:
                return node.get("id")
        logger.debug("No collection titled %r", title)
        return None

    def collection_has_product(self, collection_gid: str, product_gid: str) -> bool:
        data = self.client.graphql_request(Q_COLLECTION_HAS_PRODUCT, {
            "id": collection_gid,
            "productId": product_gid,
        })
        return bool((data.get("collection") or {}).get("hasProduct"))

    def add_product_to_collection(self, collection_gid: str, product_gid: str) -> None:
        data = self.client.graphql_request(M_COLLECTION_ADD_PRODUCTS, {
            "id": collection_gid,
            "productIds": [product_gid],
        })
        _raise_on_user_errors(data, "collectionAddProducts")

    # ── Images ─────────────────────────────────────────────────────────

    def list_product_images(self, product_id: str) -> List[ProductImage]:
        result = self.client.rest_request("GET", f"products/{product_id}/images.json")
        return [
            ProductImage(
                id=str(image["id"]),
                alt_text=(image.get("alt") or "").strip(),
                position=int(image.get("position") or 0),
            )
            for image in result.get("images") or []
            if image.get("id") is not None
        ]

    def set_image_alt_text(self, product_id: str, image_id: str, alt_text: str) -> None:
        self.client.rest_request("PUT", f"products/{product_id}/images/{image_id}.json", {
            "image": {"id": _rest_id(image_id), "alt": alt_text}
        })
