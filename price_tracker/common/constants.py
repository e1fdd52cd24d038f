"""
Shared constants for the project.

This module contains application-wide constants that should have a single source of truth.
"""

# Product status values
STATUS_FULLPRICE = "fullprice"
STATUS_SALE = "sale"
STATUS_FREE = "free"
STATUSES = (STATUS_FULLPRICE, STATUS_SALE, STATUS_FREE)

# Supported platforms
PLATFORM_STEAM = "steam"
PLATFORM_ROZETKA = "rozetka"
PLATFORM_COMFY = "comfy"
PLATFORMS = (PLATFORM_STEAM, PLATFORM_ROZETKA, PLATFORM_COMFY)

# All three storefronts are queried with a forced Ukrainian locale
DEFAULT_CURRENCY = "₴"

# Seconds before an outbound product page request is abandoned
DEFAULT_REQUEST_TIMEOUT = 10.0

DEFAULT_DATABASE_URL = "sqlite:///data/tracker.db"
