"""
Product extraction modules for supported storefronts.

Modules:
    steam_extractor - SteamExtractor for store.steampowered.com
    comfy_extractor - ComfyExtractor for comfy.ua
    rozetka_extractor - RozetkaExtractor for rozetka.com.ua
    base_extractor - Shared fetch/extract cycle and selector helpers
    identity - Stable product IDs derived from URLs
    platforms - Platform detection, names and currencies
"""

from __future__ import annotations

import requests

from ..common.constants import DEFAULT_REQUEST_TIMEOUT
from ..exceptions import UnsupportedSiteError
from ..models import ProductDetails
from .base_extractor import BaseExtractor, first_non_empty, reconcile_sale_percent
from .comfy_extractor import ComfyExtractor, parse_comfy_url
from .identity import generate_product_id, hash_code
from .platforms import get_platform_currency, get_platform_from_url, get_platform_name
from .rozetka_extractor import RozetkaExtractor, parse_rozetka_url
from .steam_extractor import SteamExtractor, parse_steam_url

UNSUPPORTED_SITE_MESSAGE = "Unsupported website. Currently supporting Steam, Comfy and Rozetka only."

# Registry of supported site extractors, checked in order against the URL
SITE_EXTRACTORS = {
    'store.steampowered.com': SteamExtractor,
    'comfy.ua': ComfyExtractor,
    'rozetka.com.ua': RozetkaExtractor,
}


def get_extractor_for_url(url: str):
    """
    Get the appropriate extractor class for a URL.

    Args:
        url: Product URL

    Returns:
        Extractor class (e.g., SteamExtractor)

    Raises:
        UnsupportedSiteError: If site is not supported
    """
    for site, extractor_class in SITE_EXTRACTORS.items():
        if site in (url or ''):
            return extractor_class

    raise UnsupportedSiteError(UNSUPPORTED_SITE_MESSAGE, url=url)


def parse_product_url(
    url: str,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> ProductDetails:
    """
    Scrape a product page with the extractor for its site.

    Unsupported sites are rejected before any request is made.

    Raises:
        UnsupportedSiteError: If site is not supported
        ScrapeError: If the page cannot be fetched or loaded
    """
    extractor_class = get_extractor_for_url(url)
    extractor = extractor_class(url, session=session, timeout=timeout)
    return extractor.parse()


__all__ = [
    # Site-specific extractors
    'BaseExtractor',
    'SteamExtractor',
    'ComfyExtractor',
    'RozetkaExtractor',
    'parse_steam_url',
    'parse_comfy_url',
    'parse_rozetka_url',
    # Dispatch
    'SITE_EXTRACTORS',
    'UNSUPPORTED_SITE_MESSAGE',
    'get_extractor_for_url',
    'parse_product_url',
    # Helpers
    'first_non_empty',
    'reconcile_sale_percent',
    'generate_product_id',
    'hash_code',
    'get_platform_from_url',
    'get_platform_currency',
    'get_platform_name',
]
