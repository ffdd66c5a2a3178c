"""
Process Settings

Reads environment configuration (optionally from a local .env file)
once at startup into an immutable Settings value that is passed
explicitly into the pipeline.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Immutable process configuration."""
    shop: str
    access_token: str
    serpapi_key: str = ""
    # Declared for parity with the store's environment; no price rule reads it
    usd_gbp: float = 0.78
    port: int = 3000
    request_timeout: float = 15.0
    event_deadline: float = 120.0

    @property
    def competitor_pricing_enabled(self) -> bool:
        return bool(self.serpapi_key)


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number (got {raw!r})") from None


def load_settings(env: Optional[Mapping[str, str]] = None, dotenv: bool = True) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        env: Mapping to read from (defaults to os.environ)
        dotenv: If True and env is None, load a local .env file first

    Returns:
        Settings

    Raises:
        ValueError: If the shop or access token is missing, or a numeric
            variable cannot be parsed
    """
    if env is None:
        if dotenv:
            load_dotenv()
        env = os.environ

    shop = env.get("SHOPIFY_SHOP", "").strip()
    token = (env.get("SHOPIFY_ACCESS_TOKEN") or env.get("SHOPIFY_TOKEN") or "").strip()

    if not shop:
        raise ValueError("SHOPIFY_SHOP is required")
    if not token:
        raise ValueError("SHOPIFY_ACCESS_TOKEN is required")

    return Settings(
        shop=shop,
        access_token=token,
        serpapi_key=env.get("SERPAPI_KEY", "").strip(),
        usd_gbp=_float(env, "USD_GBP", 0.78),
        port=int(_float(env, "PORT", 3000)),
        request_timeout=_float(env, "REQUEST_TIMEOUT", 15.0),
        event_deadline=_float(env, "EVENT_DEADLINE", 120.0),
    )
