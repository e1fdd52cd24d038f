"""
Steam Product Extractor

Extracts game data from store.steampowered.com app pages. Requests force
the Ukrainian store (cc=UA) so prices come back in hryvnia, and carry an
age-gate cookie so mature titles render their purchase area.
"""

from __future__ import annotations

import logging

import requests

from ..common.constants import (
    DEFAULT_REQUEST_TIMEOUT,
    PLATFORM_STEAM,
    STATUS_FREE,
)
from ..models import ProductDetails
from .base_extractor import BaseExtractor, PriceFields

logger = logging.getLogger(__name__)


class SteamExtractor(BaseExtractor):
    """Extracts product data from a Steam store page."""

    PLATFORM = PLATFORM_STEAM
    PLATFORM_NAME = "Steam"
    LOCALE_PARAMS = "cc=UA&l=ukrainian"
    HEADERS = {
        "Accept-Language": "uk-UA,uk;q=0.9",
        "Cookie": "birthtime=315532800; lastagecheckage=1-0-1980; mature_content=1; wants_mature_content=1",
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
        ),
    }

    def build_request_url(self) -> str:
        separator = "&" if "?" in self.url else "?"
        return f"{self.url}{separator}{self.LOCALE_PARAMS}"

    def _extract_prices(self) -> PriceFields:
        """Regular/sale prices, overridden entirely for free-to-play titles."""
        if self._is_free():
            return 0.0, None, None, STATUS_FREE
        return super()._extract_prices()

    def _is_free(self) -> bool:
        """Check the purchase area for a free marker ("Free" / "Безкоштовно")."""
        rules = self.selectors.get("free", {})
        markers = [m.lower() for m in rules.get("markers", [])]

        for selector in rules.get("selectors", []):
            text = " ".join(el.get_text() for el in self.soup.select(selector)).lower()
            if any(marker in text for marker in markers):
                logger.debug("Free marker found in %s", selector)
                return True
        return False


def parse_steam_url(
    url: str,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> ProductDetails:
    """Fetch and parse a Steam store page."""
    return SteamExtractor(url, session=session, timeout=timeout).parse()
