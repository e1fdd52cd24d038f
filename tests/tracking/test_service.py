"""Tests for price_tracker/tracking/service.py"""

import threading
from unittest.mock import MagicMock

import pytest

from price_tracker.exceptions import InputValidationError, ScrapeError, UnsupportedSiteError
from price_tracker.models import ProductDetails, SaleNotice
from price_tracker.tracking import TrackerService
from price_tracker.tracking.service import LOCK_STRIPES

STEAM_URL = "https://store.steampowered.com/app/220/HalfLife_2/"
ROZETKA_URL = "https://rozetka.com.ua/ua/monitor/p395460480/"
COMFY_URL = "https://comfy.ua/smartfon-apple-iphone-15.html"


class TestAddTrackedProduct:
    def test_fullprice_is_created(self, make_service, fullprice_details):
        record = make_service(fullprice_details).add_tracked_product("42", STEAM_URL)

        assert record.product_id == "steam_220"
        assert record.user_id == "42"
        assert record.price == 299.99
        assert record.status == "fullprice"
        assert record.platform == "steam"
        assert record.currency == "₴"

    def test_new_sale_returns_notice_and_stores_nothing(self, make_service, repository, sale_details):
        result = make_service(sale_details).add_tracked_product("42", STEAM_URL)

        assert isinstance(result, SaleNotice)
        assert result.sale_details.original_price == 500
        assert result.sale_details.sale_percent == 40
        assert repository.list_for_user("42") == []

    def test_force_add_stores_sale(self, make_service, sale_details):
        record = make_service(sale_details).force_add_tracked_product("42", STEAM_URL)

        assert record.status == "sale"
        assert record.sale_price == 300
        assert record.sale_percent == 40

    def test_sale_gate_then_force_add(self, make_service, repository, sale_details):
        service = make_service(sale_details)

        notice = service.add_tracked_product("42", STEAM_URL)
        assert isinstance(notice, SaleNotice)
        assert repository.find_one("42", "steam_220") is None

        record = service.force_add_tracked_product("42", STEAM_URL)

        assert record.status == "sale"
        stored = repository.list_for_user("42")
        assert [p.product_id for p in stored] == ["steam_220"]

    def test_fullprice_readd_updates_in_place(self, make_service, repository, fullprice_details):
        cheaper = ProductDetails("Half-Life 2", "Action", price=249.0)
        service = make_service(fullprice_details, cheaper)

        first = service.add_tracked_product("42", STEAM_URL)
        second = service.add_tracked_product("42", STEAM_URL)

        assert second.id == first.id
        assert second.price == 249.0
        assert second.date_added == first.date_added
        assert second.updated_at > first.updated_at
        assert len(repository.list_for_user("42")) == 1

    def test_tracked_product_going_on_sale_is_updated(
        self, make_service, repository, fullprice_details, sale_details
    ):
        service = make_service(fullprice_details, sale_details)
        first = service.add_tracked_product("42", STEAM_URL)
        second = service.add_tracked_product("42", STEAM_URL)

        assert not isinstance(second, SaleNotice)
        assert second.id == first.id
        assert second.status == "sale"
        assert second.date_added == first.date_added
        assert second.updated_at > first.updated_at
        assert len(repository.list_for_user("42")) == 1

    def test_url_is_stripped(self, make_service, fullprice_details):
        record = make_service(fullprice_details).add_tracked_product("42", f"  {STEAM_URL}\n")
        assert record.url == STEAM_URL

    def test_free_product(self, make_service):
        free = ProductDetails("Dota 2", "Strategy", status="free")
        record = make_service(free).add_tracked_product("42", "https://store.steampowered.com/app/570/")

        assert record.status == "free"
        assert record.price == 0

    @pytest.mark.parametrize("user_id,url", [
        ("", STEAM_URL),
        ("42", ""),
        (None, STEAM_URL),
    ])
    def test_missing_input_makes_no_request(self, repository, fake_parser, fullprice_details, user_id, url):
        parser = fake_parser(fullprice_details)
        service = TrackerService(repository, parser=parser)

        with pytest.raises(InputValidationError, match="User ID and URL are required"):
            service.add_tracked_product(user_id, url)
        assert parser.calls == []

    def test_unsupported_site(self, repository):
        session = MagicMock()
        service = TrackerService(repository, session=session)

        with pytest.raises(UnsupportedSiteError):
            service.add_tracked_product("42", "https://www.amazon.com/dp/B000")
        session.get.assert_not_called()

    def test_scrape_failure_stores_nothing(self, repository):
        def failing_parser(url, session=None, timeout=None):
            raise ScrapeError("Failed to parse Steam page: timed out", url=url, platform="steam")

        service = TrackerService(repository, parser=failing_parser)

        with pytest.raises(ScrapeError):
            service.add_tracked_product("42", STEAM_URL)
        assert repository.list_for_user("42") == []

    def test_concurrent_adds_keep_one_record(self, make_service, repository, fullprice_details):
        service = make_service(fullprice_details)
        errors = []

        def add():
            try:
                service.add_tracked_product("42", STEAM_URL)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=add) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(repository.list_for_user("42")) == 1


class TestRemoveTrackedProduct:
    def test_remove_by_platform_id(self, make_service, fullprice_details):
        service = make_service(fullprice_details)
        service.add_tracked_product("42", STEAM_URL)

        assert service.remove_tracked_product("42", "220") is True
        assert service.list_tracked_products("42") == []

    def test_remove_by_record_id(self, make_service, fullprice_details):
        service = make_service(fullprice_details)
        record = service.add_tracked_product("42", STEAM_URL)

        assert service.remove_tracked_record("42", record.id) is True
        assert service.get_tracked_product(record.id) is None

    def test_app_id_matching_another_record_id(self, make_service, fullprice_details):
        service = make_service(fullprice_details)
        rozetka = service.add_tracked_product("42", ROZETKA_URL)
        service.add_tracked_product("42", "https://store.steampowered.com/app/1/")
        assert rozetka.id == 1

        assert service.remove_tracked_product("42", "1") is True

        remaining = [p.product_id for p in service.list_tracked_products("42")]
        assert remaining == ["rozetka.com.ua_p395460480"]

    def test_remove_record_requires_user(self, make_service, fullprice_details):
        with pytest.raises(InputValidationError):
            make_service(fullprice_details).remove_tracked_record("", 1)

    def test_remove_missing(self, make_service, fullprice_details):
        assert make_service(fullprice_details).remove_tracked_product("42", "steam_1") is False

    def test_remove_requires_input(self, make_service, fullprice_details):
        with pytest.raises(InputValidationError):
            make_service(fullprice_details).remove_tracked_product("42", "")


class TestListTrackedProducts:
    @pytest.fixture
    def service(self, make_service):
        steam_sale = ProductDetails("Half-Life 2", "Action", 500.0, 300.0, 40, "sale")
        rozetka_full = ProductDetails("Монітор", "Монітори", 1000.0)
        comfy_sale = ProductDetails("iPhone 15", "Смартфони", 1000.0, 750.0, 25, "sale")

        service = make_service(steam_sale, rozetka_full, comfy_sale)
        service.force_add_tracked_product("42", STEAM_URL)
        service.force_add_tracked_product("42", ROZETKA_URL)
        service.force_add_tracked_product("42", COMFY_URL)
        return service

    def names(self, products):
        return [p.product_name for p in products]

    def test_default_newest_first(self, service):
        assert self.names(service.list_tracked_products("42")) == [
            "iPhone 15", "Монітор", "Half-Life 2",
        ]

    def test_platform_filter(self, service):
        products = service.list_tracked_products("42", platform="rozetka")
        assert self.names(products) == ["Монітор"]

    def test_sale_filter(self, service):
        products = service.list_tracked_products("42", sale_only=True, sort_order="asc")
        assert self.names(products) == ["Half-Life 2", "iPhone 15"]

    def test_price_sort_uses_sale_price(self, service):
        products = service.list_tracked_products("42", sort_field="price", sort_order="asc")
        assert self.names(products) == ["Half-Life 2", "iPhone 15", "Монітор"]

    def test_sale_percent_sort(self, service):
        products = service.list_tracked_products("42", sort_field="salePercent")
        assert self.names(products) == ["Half-Life 2", "iPhone 15", "Монітор"]

    def test_other_user_sees_nothing(self, service):
        assert service.list_tracked_products("7") == []

    def test_requires_user(self, service):
        with pytest.raises(InputValidationError):
            service.list_tracked_products("")

    def test_get_tracked_product(self, service):
        record = service.list_tracked_products("42", platform="comfy")[0]
        assert service.get_tracked_product(record.id).product_id == "comfy.ua_smartfon-apple-iphone-15.html"


class TestLockStriping:
    def test_same_key_same_lock(self, make_service, fullprice_details):
        service = make_service(fullprice_details)
        assert service._lock_for("42", "steam_220") is service._lock_for("42", "steam_220")

    def test_pool_does_not_grow(self, make_service, fullprice_details):
        service = make_service(fullprice_details)
        for i in range(500):
            service._lock_for("42", f"steam_{i}")
        assert len(service._locks) == LOCK_STRIPES
