"""Shared test fixtures."""

from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest

from price_tracker.models import ProductDetails
from price_tracker.storage import (
    TrackedProductRepository,
    get_engine,
    get_session_factory,
    init_db,
)
from price_tracker.tracking import TrackerService


class TickingClock:
    """Deterministic clock that advances one minute per call."""

    def __init__(self, start: datetime = datetime(2024, 3, 1, 12, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(minutes=1)
        return self.now


class FakeParser:
    """Stands in for parse_product_url; returns queued ProductDetails."""

    def __init__(self, *results: ProductDetails):
        self.results = list(results)
        self.calls = []

    def __call__(self, url, session=None, timeout=None):
        self.calls.append(url)
        if len(self.results) > 1:
            return self.results.pop(0)
        return self.results[0]


def make_page(body: str) -> str:
    """Wrap a body fragment in a minimal HTML document."""
    return f"<html><head><title>Test</title></head><body>{body}</body></html>"


def mock_response(html: str, status_code: int = 200) -> MagicMock:
    """Create a requests.Response stand-in."""
    response = MagicMock()
    response.status_code = status_code
    response.text = html
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def session_factory():
    """Session factory over a fresh in-memory SQLite database."""
    engine = get_engine("sqlite://")
    init_db(engine)
    yield get_session_factory(engine)
    engine.dispose()


@pytest.fixture
def repository(session_factory, clock):
    return TrackedProductRepository(session_factory, clock=clock)


@pytest.fixture
def fullprice_details():
    return ProductDetails(
        product_name="Half-Life 2",
        category="Action",
        price=299.99,
        status="fullprice",
    )


@pytest.fixture
def sale_details():
    return ProductDetails(
        product_name="Half-Life 2",
        category="Action",
        price=500.0,
        sale_price=300.0,
        sale_percent=40,
        status="sale",
    )


@pytest.fixture
def make_service(repository):
    """Build a TrackerService whose scraper returns the given details."""
    def _make(*results: ProductDetails) -> TrackerService:
        return TrackerService(repository, parser=FakeParser(*results))
    return _make


@pytest.fixture
def page():
    """Build a product page from a body fragment."""
    return make_page


@pytest.fixture
def fake_response():
    """Build a mocked HTTP response."""
    return mock_response


@pytest.fixture
def fake_parser():
    """Build a FakeParser returning the given details."""
    return FakeParser
