"""
Tracking Service

Add / force-add / remove / list workflow for tracked products.

WORKFLOW (add):
1. Validate user_id and url (no network call on failure)
2. Scrape the page with the extractor for its site
3. Derive the product_id from the URL
4. Sale gate: a product that is already on sale and not yet tracked is not
   stored; a SaleNotice is returned so the user can confirm via force-add
5. Existing record -> update in place, otherwise insert
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, List, Optional, Tuple, Union

import requests

from ..common.constants import DEFAULT_REQUEST_TIMEOUT, STATUS_SALE
from ..exceptions import InputValidationError
from ..extraction import (
    generate_product_id,
    get_platform_currency,
    get_platform_from_url,
    parse_product_url,
)
from ..models import ProductDetails, SaleNotice
from ..storage import TrackedProduct, TrackedProductRepository

logger = logging.getLogger(__name__)

ProductParser = Callable[..., ProductDetails]

# Size of the striped lock pool guarding (user_id, product_id) upserts
LOCK_STRIPES = 64

SORT_FIELDS = {
    "dateAdded": lambda p: p.date_added or p.updated_at or datetime.min,
    "price": lambda p: (p.sale_price or 0) if p.status == STATUS_SALE else (p.price or 0),
    "salePercent": lambda p: p.sale_percent or 0,
    "updatedAt": lambda p: p.updated_at or datetime.min,
    "productName": lambda p: p.product_name or "",
    "category": lambda p: p.category or "",
}


class TrackerService:
    """
    Orchestrates scraping and persistence of tracked products.

    Usage:
        service = TrackerService(TrackedProductRepository(session_factory))
        result = service.add_tracked_product("42", url)
        if isinstance(result, SaleNotice):
            # ask the user, then:
            service.force_add_tracked_product("42", url)
    """

    def __init__(
        self,
        repository: TrackedProductRepository,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        parser: ProductParser = parse_product_url,
    ):
        self.repository = repository
        self.session = session
        self.timeout = timeout
        self._parser = parser

        # Two submissions of the same product by the same user always map to
        # the same stripe, so their read and write cannot interleave
        self._locks: Tuple[threading.Lock, ...] = tuple(
            threading.Lock() for _ in range(LOCK_STRIPES)
        )

    def add_tracked_product(self, user_id: str, url: str) -> Union[TrackedProduct, SaleNotice]:
        """
        Track a product, unless it is already discounted and not yet tracked.

        Raises:
            InputValidationError: If user_id or url is missing
            UnsupportedSiteError: If the URL is not from a supported site
            ScrapeError: If the page cannot be fetched or loaded
            PersistenceError: If the store read/write fails
        """
        return self._track(user_id, url, force=False)

    def force_add_tracked_product(self, user_id: str, url: str) -> TrackedProduct:
        """Track a product regardless of its sale status."""
        return self._track(user_id, url, force=True)

    def remove_tracked_product(self, user_id: str, identifier: str) -> bool:
        """
        Stop tracking a product.

        Args:
            user_id: Owning user
            identifier: Generated product_id or platform-native id

        Returns:
            True if removed, False if nothing matched
        """
        if not user_id or not identifier:
            raise InputValidationError("User ID and product identifier are required")
        return self.repository.delete(str(user_id), str(identifier))

    def remove_tracked_record(self, user_id: str, record_id: int) -> bool:
        """Stop tracking the user's record with this surrogate id."""
        if not user_id or record_id is None:
            raise InputValidationError("User ID and record ID are required")
        return self.repository.delete_by_record_id(str(user_id), int(record_id))

    def get_tracked_product(self, record_id: int) -> Optional[TrackedProduct]:
        """Fetch one tracked product by record id."""
        return self.repository.get_by_id(record_id)

    def list_tracked_products(
        self,
        user_id: str,
        platform: str = "all",
        sale_only: bool = False,
        sort_field: str = "dateAdded",
        sort_order: str = "desc",
    ) -> List[TrackedProduct]:
        """
        List a user's tracked products with optional filters.

        Args:
            user_id: Owning user
            platform: "all" or one of steam / rozetka / comfy
            sale_only: Only products currently on sale
            sort_field: dateAdded, price (sale price when on sale), salePercent,
                updatedAt, productName or category
            sort_order: "asc" or "desc"
        """
        if not user_id:
            raise InputValidationError("User ID is required")

        products = self.repository.list_for_user(str(user_id))

        if platform and platform != "all":
            products = [p for p in products if p.platform == platform]
        if sale_only:
            products = [p for p in products if p.status == STATUS_SALE]

        key = SORT_FIELDS.get(sort_field, SORT_FIELDS["dateAdded"])
        return sorted(products, key=key, reverse=(sort_order != "asc"))

    # ── Internals ─────────────────────────────────────────────────────────────

    def _track(self, user_id: str, url: str, force: bool) -> Union[TrackedProduct, SaleNotice]:
        if not user_id or not url:
            raise InputValidationError("User ID and URL are required", url=url)

        user_id = str(user_id)
        url = url.strip()
        logger.info("Adding product for user %s with URL: %s", user_id, url)

        details = self._parser(url, session=self.session, timeout=self.timeout)
        product_id = generate_product_id(url)

        with self._lock_for(user_id, product_id):
            if not force and details.status == STATUS_SALE:
                if self.repository.find_one(user_id, product_id) is None:
                    logger.info("Product %s is already on sale, asking for confirmation", product_id)
                    return SaleNotice.from_details(details)

            platform = get_platform_from_url(url)
            fields = {
                "url": url,
                "product_name": details.product_name,
                "category": details.category,
                "price": details.price,
                "sale_price": details.sale_price,
                "sale_percent": details.sale_percent,
                "status": details.status,
                "platform": platform,
                "currency": get_platform_currency(platform),
            }
            record, created = self.repository.upsert(user_id, product_id, fields)

        if created:
            logger.info("Created tracked product: %s", record.product_name)
        else:
            logger.info("Updated tracked product: %s", record.product_name)
        return record

    def _lock_for(self, user_id: str, product_id: str) -> threading.Lock:
        return self._locks[hash((user_id, product_id)) % len(self._locks)]
