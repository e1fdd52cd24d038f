"""
Product Identity

Derives a stable key from a product URL so that submitting the same URL
twice lands on the same tracked record. Pure functions, no network access.
"""

import re
from urllib.parse import urlsplit

STEAM_STORE_HOST = "store.steampowered.com"
_STEAM_APP_ID = re.compile(r'app/(\d+)')


def hash_code(text: str) -> int:
    """
    Rolling 31-multiplier string hash truncated to a signed 32-bit integer.

    Iterates over UTF-16 code units, the same way JavaScript and Java string
    hashes do, so non-BMP characters hash identically across clients.
    """
    value = 0
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        value = (value * 31 + unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def generate_product_id(url: str) -> str:
    """
    Generate a stable product ID from URL.

    Rules:
        - Steam store URL with an app/{digits} path -> "steam_{digits}"
        - Any other parseable URL -> "{host without www.}_{last path segment}"
        - Malformed URL -> "product_{abs(hash_code(url))}"

    Args:
        url: Product URL

    Returns:
        Generated product ID
    """
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError:
        hostname = None
        parts = None

    if parts is None or not parts.scheme or not hostname:
        return f"product_{abs(hash_code(url))}"

    path = parts.path
    if path.endswith('/'):
        path = path[:-1]

    if hostname == STEAM_STORE_HOST or hostname.endswith("." + STEAM_STORE_HOST):
        match = _STEAM_APP_ID.search(path)
        if match:
            return f"steam_{match.group(1)}"

    last_part = path.split('/')[-1]
    domain = hostname.replace('www.', '', 1)
    return f"{domain}_{last_part}"
