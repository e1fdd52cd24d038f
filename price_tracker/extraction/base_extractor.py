"""
Base Product Extractor

Shared fetch / load / extract cycle for the storefront extractors.
Field lookups are driven by the selector chains in config/selectors.yaml;
subclasses provide the request headers and any platform quirks.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

import requests
from bs4 import BeautifulSoup

from ..common.config_loader import load_selectors
from ..common.constants import DEFAULT_REQUEST_TIMEOUT, STATUS_FULLPRICE, STATUS_SALE
from ..common.text_utils import clean_text, parse_percent, parse_price, round_half_up
from ..exceptions import ScrapeError
from ..models import ProductDetails

logger = logging.getLogger(__name__)

CHROME_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/98.0.4758.102 Safari/537.36"
)

PriceFields = Tuple[float, Optional[float], Optional[int], str]


def first_non_empty(
    soup: BeautifulSoup,
    selectors: Iterable[str],
    exclude: Optional[str] = None,
) -> str:
    """
    Return the text of the first selector whose first match is non-empty.

    Args:
        soup: Parsed page
        selectors: CSS selectors in priority order
        exclude: Skip a match whose text contains this substring

    Returns:
        Cleaned text, or empty string when nothing matches
    """
    for selector in selectors:
        element = soup.select_one(selector)
        if element is None:
            continue
        text = clean_text(element.get_text())
        if not text:
            continue
        if exclude and exclude in text:
            continue
        return text
    return ""


def breadcrumb_category(soup: BeautifulSoup, selector: str) -> str:
    """
    Take the second-to-last breadcrumb entry as the category.

    The last entry is the product itself. Fewer than two entries yields "".
    """
    items = soup.select(selector)
    if len(items) > 1:
        return clean_text(items[-2].get_text())
    return ""


def reconcile_sale_percent(
    explicit: Optional[int],
    original_price: float,
    sale_price: Optional[float],
) -> Optional[int]:
    """
    Pick the discount percentage for a sale.

    A percentage printed on the page wins. Otherwise it is computed as
    round((1 - sale / original) * 100) when both prices are positive.
    """
    if explicit:
        return explicit
    if original_price > 0 and sale_price and sale_price > 0:
        return round_half_up((1 - sale_price / original_price) * 100)
    return explicit


class BaseExtractor:
    """
    Extracts ProductDetails from one storefront product page.

    Usage:
        extractor = SteamExtractor(url)
        extractor.fetch()
        details = extractor.extract()

    or, for HTML fetched elsewhere:
        extractor.load_html(html)
        details = extractor.extract()
    """

    PLATFORM = ""
    PLATFORM_NAME = ""
    HEADERS: Dict[str, str] = {}

    def __init__(
        self,
        url: str,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        selectors: Dict[str, Any] | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self._session = session
        self.selectors = selectors if selectors is not None else load_selectors(self.PLATFORM)
        self.html = None
        self.soup = None

    def build_request_url(self) -> str:
        """URL actually requested (subclasses add locale parameters)."""
        return self.url

    def fetch(self) -> None:
        """Fetch the product page HTML."""
        request_url = self.build_request_url()
        logger.info("Fetching %s page: %s", self.PLATFORM_NAME, request_url)

        requester = self._session or requests
        try:
            response = requester.get(request_url, headers=self.HEADERS, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error("Error fetching %s page %s: %s", self.PLATFORM_NAME, request_url, e)
            raise self._scrape_error(str(e)) from e

        self.load_html(response.text)

    def load_html(self, html: str) -> None:
        """Load pre-fetched HTML for extraction without a network request."""
        if not html or not html.strip():
            raise self._scrape_error("empty document")
        self.html = html
        self.soup = BeautifulSoup(self.html, "lxml")

    def parse(self) -> ProductDetails:
        """Fetch and extract in one step."""
        self.fetch()
        return self.extract()

    def extract(self) -> ProductDetails:
        """Extract all product fields from the loaded page."""
        if self.soup is None:
            raise self._scrape_error("page has not been loaded")

        product_name = self._extract_name()
        category = self._extract_category()
        price, sale_price, sale_percent, status = self._extract_prices()

        details = ProductDetails(
            product_name=product_name,
            category=category,
            price=price,
            sale_price=sale_price,
            sale_percent=sale_percent,
            status=status,
        )
        logger.info(
            "Parsed %s product: %s, Price: %s, Sale: %s, Status: %s",
            self.PLATFORM_NAME, details.product_name, details.price,
            details.sale_price, details.status,
        )
        return details

    def _extract_name(self) -> str:
        """Extract product name, falling back to the platform placeholder."""
        rules = self.selectors.get("name", {})
        name = first_non_empty(self.soup, rules.get("selectors", []))
        return name or rules.get("default", "")

    def _extract_category(self) -> str:
        """Extract category from breadcrumbs or genre tags."""
        rules = self.selectors.get("category", {})

        if rules.get("breadcrumbs"):
            category = breadcrumb_category(self.soup, rules["breadcrumbs"])
        else:
            category = first_non_empty(self.soup, rules.get("selectors", []))

        return category or rules.get("default", "")

    def _extract_prices(self) -> PriceFields:
        """
        Extract (price, sale_price, sale_percent, status).

        The page counts as discounted only when every element listed in
        price.sale_markers has text. Otherwise the regular price chain is read.
        """
        rules = self.selectors.get("price", {})
        texts = {
            key: first_non_empty(self.soup, rules.get(key, []))
            for key in ("original_price", "sale_price", "discount_percent")
        }

        markers = rules.get("sale_markers", [])
        if markers and all(texts.get(marker) for marker in markers):
            original_price = parse_price(texts["original_price"])
            sale_price = parse_price(texts["sale_price"]) if texts["sale_price"] else None
            sale_percent = reconcile_sale_percent(
                parse_percent(texts["discount_percent"]), original_price, sale_price
            )
            return original_price, sale_price, sale_percent, STATUS_SALE

        regular_text = first_non_empty(
            self.soup,
            rules.get("regular_price", []),
            exclude=rules.get("regular_price_exclude"),
        )
        return parse_price(regular_text), None, None, STATUS_FULLPRICE

    def _scrape_error(self, cause: str) -> ScrapeError:
        return ScrapeError(
            f"Failed to parse {self.PLATFORM_NAME} page: {cause}",
            url=self.url,
            platform=self.PLATFORM,
        )
