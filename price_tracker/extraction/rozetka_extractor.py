"""
Rozetka Product Extractor

Extracts product data from rozetka.com.ua. A discounted product shows the
old price in a small element above a red main price; both must be present
for the page to count as a sale.
"""

from __future__ import annotations

import requests

from ..common.constants import DEFAULT_REQUEST_TIMEOUT, PLATFORM_ROZETKA
from ..models import ProductDetails
from .base_extractor import CHROME_USER_AGENT, BaseExtractor


class RozetkaExtractor(BaseExtractor):
    """Extracts product data from a Rozetka product page."""

    PLATFORM = PLATFORM_ROZETKA
    PLATFORM_NAME = "Rozetka"
    HEADERS = {
        "User-Agent": CHROME_USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": "uk-UA,uk;q=0.9,en-US;q=0.8,en;q=0.7",
        "Referer": "https://rozetka.com.ua/",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
    }


def parse_rozetka_url(
    url: str,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> ProductDetails:
    """Fetch and parse a Rozetka product page."""
    return RozetkaExtractor(url, session=session, timeout=timeout).parse()
