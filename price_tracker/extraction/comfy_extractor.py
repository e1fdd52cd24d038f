"""
Comfy Product Extractor

Extracts product data from comfy.ua. The site serves a stripped page to
clients that do not look like a browser navigating from its own home page,
so requests carry a full desktop Chrome header set.
"""

from __future__ import annotations

import requests

from ..common.constants import DEFAULT_REQUEST_TIMEOUT, PLATFORM_COMFY
from ..models import ProductDetails
from .base_extractor import CHROME_USER_AGENT, BaseExtractor


class ComfyExtractor(BaseExtractor):
    """Extracts product data from a Comfy product page."""

    PLATFORM = PLATFORM_COMFY
    PLATFORM_NAME = "Comfy"
    HEADERS = {
        "User-Agent": CHROME_USER_AGENT,
        "Accept": (
            "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,"
            "image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.9"
        ),
        "Accept-Language": "uk-UA,uk;q=0.9,en-US;q=0.8,en;q=0.7",
        "Accept-Encoding": "gzip, deflate",
        "Referer": "https://comfy.ua/",
        "Cache-Control": "max-age=0",
        "Connection": "keep-alive",
        "Sec-Ch-Ua": '"Chromium";v="98", " Not A;Brand";v="99"',
        "Sec-Ch-Ua-Mobile": "?0",
        "Sec-Ch-Ua-Platform": '"Windows"',
        "Sec-Fetch-Dest": "document",
        "Sec-Fetch-Mode": "navigate",
        "Sec-Fetch-Site": "same-origin",
        "Sec-Fetch-User": "?1",
        "Upgrade-Insecure-Requests": "1",
    }


def parse_comfy_url(
    url: str,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> ProductDetails:
    """Fetch and parse a Comfy product page."""
    return ComfyExtractor(url, session=session, timeout=timeout).parse()
