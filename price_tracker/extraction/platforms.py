"""
Platform Detector

Classifies a URL into one of the supported storefronts by plain substring
match. Well-formedness of the URL is checked elsewhere.
"""

from typing import Optional

from ..common.constants import (
    DEFAULT_CURRENCY,
    PLATFORM_COMFY,
    PLATFORM_ROZETKA,
    PLATFORM_STEAM,
)

# Checked in order; first match wins
PLATFORM_DOMAINS = (
    ('store.steampowered.com', PLATFORM_STEAM),
    ('steamcommunity.com', PLATFORM_STEAM),
    ('rozetka.com.ua', PLATFORM_ROZETKA),
    ('comfy.ua', PLATFORM_COMFY),
)

PLATFORM_NAMES = {
    PLATFORM_STEAM: 'Steam',
    PLATFORM_ROZETKA: 'Rozetka',
    PLATFORM_COMFY: 'Comfy',
}

PLATFORM_CURRENCIES = {
    PLATFORM_STEAM: '₴',
    PLATFORM_ROZETKA: '₴',
    PLATFORM_COMFY: '₴',
}


def get_platform_from_url(url: str) -> Optional[str]:
    """
    Get platform identifier from URL.

    Returns:
        "steam", "rozetka", "comfy", or None for any other site
    """
    if not url:
        return None

    for domain, platform in PLATFORM_DOMAINS:
        if domain in url:
            return platform

    return None


def get_platform_currency(platform: Optional[str]) -> str:
    """Currency symbol prices are reported in for a platform."""
    return PLATFORM_CURRENCIES.get((platform or '').lower(), DEFAULT_CURRENCY)


def get_platform_name(platform: Optional[str]) -> str:
    """Human-readable platform name."""
    return PLATFORM_NAMES.get((platform or '').lower(), 'Unknown')
