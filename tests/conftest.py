"""Shared test fixtures."""

from decimal import Decimal

import pytest

from catalog_enrichment.common.config_loader import load_pricing_rules, load_seo_settings
from catalog_enrichment.common.settings import Settings
from catalog_enrichment.models import ProductEvent, ProductImage
from catalog_enrichment.shopify.errors import ShopifyAPIError, ShopifyNotFoundError


class FakeGateway:
    """
    In-memory platform double.

    Holds product state deterministically (every write overwrites),
    records every call in order, and can be told to fail specific
    operations.
    """

    def __init__(self, collections=None, images=None):
        # title -> collection gid
        self.collections = dict(collections or {})
        # collection gid -> set of product gids
        self.members = {gid: set() for gid in self.collections.values()}
        # image id -> alt text
        self.images = dict(images or {})
        self.seo = None
        self.body_html = None
        self.tags = None
        self.prices = {}
        self.metafields = {}
        self.calls = []
        # method name -> exception (or list of exceptions keyed by first arg)
        self.failures = {}
        self.not_found_variants = set()

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        error = self.failures.get(name)
        if isinstance(error, dict):
            error = error.get(args[0])
        if error is not None:
            raise error

    def calls_to(self, name):
        return [c for c in self.calls if c[0] == name]

    def update_product_seo(self, product_gid, title, description):
        self._record("update_product_seo", product_gid, title, description)
        self.seo = (title, description)

    def update_product_description(self, product_id, body_html):
        self._record("update_product_description", product_id, body_html)
        self.body_html = body_html

    def update_product_tags(self, product_id, tags):
        self._record("update_product_tags", product_id, list(tags))
        self.tags = list(tags)

    def update_variant_price_rest(self, variant_id, price):
        self._record("update_variant_price_rest", variant_id, price)
        if variant_id in self.not_found_variants:
            raise ShopifyNotFoundError(f"PUT variants/{variant_id}.json: not found")
        self.prices[variant_id] = price

    def update_variant_price_graphql(self, product_gid, variant_gid, price):
        self._record("update_variant_price_graphql", variant_gid, product_gid, price)
        self.prices[variant_gid.rsplit("/", 1)[-1]] = price

    def set_metafield(self, owner_gid, namespace, key, value, value_type="single_line_text_field"):
        self._record("set_metafield", owner_gid, namespace, key, value, value_type)
        self.metafields[(owner_gid, namespace, key)] = value

    def find_collection_by_title(self, title):
        self._record("find_collection_by_title", title)
        return self.collections.get(title)

    def collection_has_product(self, collection_gid, product_gid):
        self._record("collection_has_product", collection_gid, product_gid)
        return product_gid in self.members[collection_gid]

    def add_product_to_collection(self, collection_gid, product_gid):
        self._record("add_product_to_collection", collection_gid, product_gid)
        self.members[collection_gid].add(product_gid)

    def list_product_images(self, product_id):
        self._record("list_product_images", product_id)
        return [
            ProductImage(id=image_id, alt_text=alt, position=i)
            for i, (image_id, alt) in enumerate(self.images.items(), 1)
        ]

    def set_image_alt_text(self, product_id, image_id, alt_text):
        self._record("set_image_alt_text", image_id, product_id, alt_text)
        self.images[image_id] = alt_text


@pytest.fixture
def pricing_rules():
    """Price rules from the repo's config/pricing.yaml."""
    return load_pricing_rules()


@pytest.fixture
def seo_settings():
    """SEO settings from the repo's config/seo_settings.yaml."""
    return load_seo_settings()


@pytest.fixture
def settings():
    return Settings(shop="test-store", access_token="shpat_test", event_deadline=60.0)


@pytest.fixture
def moissanite_payload():
    """products/create webhook body for a silver tennis necklace."""
    return {
        "id": 8001,
        "admin_graphql_api_id": "gid://shopify/Product/8001",
        "title": "Moissanite Tennis Necklace S925 | Free Shipping",
        "body_html": (
            "<p>Sparkling <b>moissanite</b> stones in a classic tennis setting.</p>"
            '<figure><img src="https://supplier.example.com/a.jpg"><figcaption>Model shot</figcaption></figure>'
            "<p>Adjustable clasp.</p>"
        ),
        "tags": "new-in, Jewelry",
        "product_type": "",
        "variants": [
            {
                "id": 9001,
                "admin_graphql_api_id": "gid://shopify/ProductVariant/9001",
                "title": "18 inch",
                "option1": "18 inch",
            },
            {
                "id": 9002,
                "admin_graphql_api_id": "gid://shopify/ProductVariant/9002",
                "title": "20 inch",
                "option1": "20 inch",
            },
        ],
    }


@pytest.fixture
def moissanite_event(moissanite_payload):
    return ProductEvent.from_payload(moissanite_payload)


@pytest.fixture
def steel_payload():
    return {
        "id": 8002,
        "title": "Stainless Steel Chain Bracelet",
        "body_html": "<p>Everyday curb chain bracelet.</p>",
        "tags": "",
        "variants": [{"id": 9101, "title": "Default Title"}],
    }


@pytest.fixture
def fake_gateway():
    return FakeGateway(
        collections={
            "Necklaces": "gid://shopify/Collection/1",
            "Moissanite Jewelry": "gid://shopify/Collection/2",
        },
        images={"501": "", "502": "Hand-written alt"},
    )


@pytest.fixture
def api_error():
    return ShopifyAPIError("HTTP 500 boom", status_code=500)


@pytest.fixture
def sample_prices():
    return {"9001": Decimal("329.99"), "9002": Decimal("349.99")}
