"""
Competitor Price Source

Looks up observed market prices for a search phrase through SerpAPI's
Google Shopping engine. Any failure degrades to an empty sample; the
caller then prices from its fallback table.
"""

import logging
from typing import List, Optional

import requests

logger = logging.getLogger(__name__)


class CompetitorPriceSource:
    """
    Query-by-text competitor price lookup.

    Usage:
        source = CompetitorPriceSource(api_key="...")
        prices = source.search_prices("Moissanite Tennis Necklace")
    """

    ENDPOINT = "https://serpapi.com/search.json"

    def __init__(
        self,
        api_key: str,
        timeout: float = 15.0,
        country: str = "uk",
        language: str = "en",
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the source.

        Args:
            api_key: SerpAPI key
            timeout: Request timeout in seconds
            country: Google "gl" market code
            language: Google "hl" interface language
            session: Optional shared requests session
        """
        self.api_key = api_key
        self.timeout = timeout
        self.country = country
        self.language = language
        self.session = session or requests.Session()

    def close(self):
        self.session.close()

    def search_prices(self, query: str) -> List[float]:
        """
        Observed prices for a search phrase.

        Args:
            query: Search phrase (usually the product title)

        Returns:
            List of extracted prices; empty on any error or no results
        """
        if not query or not query.strip():
            return []

        params = {
            "engine": "google_shopping",
            "q": query.strip(),
            "hl": self.language,
            "gl": self.country,
            "api_key": self.api_key,
        }

        try:
            response = self.session.get(self.ENDPOINT, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout:
            logger.warning("Competitor price lookup timed out for %r", query)
            return []
        except requests.exceptions.RequestException as e:
            logger.warning("Competitor price lookup failed for %r: %s", query, e)
            return []
        except ValueError as e:
            logger.warning("Competitor price response was not JSON: %s", e)
            return []

        prices = []
        for item in data.get("shopping_results") or []:
            price = item.get("extracted_price") if isinstance(item, dict) else None
            if isinstance(price, (int, float)) and not isinstance(price, bool) and price > 0:
                prices.append(float(price))

        logger.debug("Competitor lookup %r: %d prices", query, len(prices))
        return prices
