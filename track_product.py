#!/usr/bin/env python3
"""
Product Price Tracker

Scrape a product page or manage a user's tracked products.
Site is auto-detected from URL (Steam, Comfy, Rozetka).

Usage:
    python3 track_product.py parse https://store.steampowered.com/app/730/
    python3 track_product.py add 42 https://rozetka.com.ua/ua/some-product/p123/
    python3 track_product.py add 42 https://comfy.ua/some-product.html --force
    python3 track_product.py list 42 --platform steam --sale --sort price_asc
    python3 track_product.py remove 42 steam_730
    python3 track_product.py remove 42 3 --record

SETUP:
    Optional environment variables (or .env):
    - TRACKER_DATABASE_URL: SQLAlchemy URL (default sqlite:///data/tracker.db)
    - TRACKER_REQUEST_TIMEOUT: Page request timeout in seconds (default 10)
"""

import argparse
import json
import sys

import requests

from price_tracker.common import load_settings, setup_logging
from price_tracker.common.constants import PLATFORMS
from price_tracker.exceptions import ScrapeError, TrackerError, UnsupportedSiteError
from price_tracker.extraction import get_platform_from_url, get_platform_name, parse_product_url
from price_tracker.models import SaleNotice
from price_tracker.storage import (
    TrackedProductRepository,
    get_engine,
    get_session_factory,
    init_db,
)
from price_tracker.tracking import SORT_FIELDS, TrackerService


def build_service(database_url: str, timeout: float) -> TrackerService:
    """Wire the repository and HTTP session into a TrackerService."""
    engine = get_engine(database_url)
    init_db(engine)
    repository = TrackedProductRepository(get_session_factory(engine))
    return TrackerService(repository, session=requests.Session(), timeout=timeout)


def print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def parse_sort(value: str) -> tuple:
    """Split "price_asc" into ("price", "asc")."""
    field, _, order = value.rpartition("_")
    if field not in SORT_FIELDS or order not in ("asc", "desc"):
        raise argparse.ArgumentTypeError(
            f"Invalid sort '{value}'. Use FIELD_asc or FIELD_desc with FIELD in: "
            + ", ".join(SORT_FIELDS)
        )
    return field, order


def main():
    parser = argparse.ArgumentParser(
        description="Track product prices on Steam, Comfy and Rozetka"
    )
    parser.add_argument("--database-url", help="Override TRACKER_DATABASE_URL")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", action="store_true", help="Warnings only")

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="Scrape a product page without saving")
    parse_cmd.add_argument("url", help="Product URL")

    add_cmd = subparsers.add_parser("add", help="Start tracking a product")
    add_cmd.add_argument("user_id", help="Owning user ID")
    add_cmd.add_argument("url", help="Product URL")
    add_cmd.add_argument(
        "--force",
        action="store_true",
        help="Track even if the product is already on sale",
    )

    remove_cmd = subparsers.add_parser("remove", help="Stop tracking a product")
    remove_cmd.add_argument("user_id", help="Owning user ID")
    remove_cmd.add_argument("identifier", help="Product ID or platform ID (e.g. a Steam app ID)")
    remove_cmd.add_argument(
        "--record",
        action="store_true",
        help="Treat the identifier as a record ID from 'list' output",
    )

    list_cmd = subparsers.add_parser("list", help="List tracked products")
    list_cmd.add_argument("user_id", help="Owning user ID")
    list_cmd.add_argument(
        "--platform",
        default="all",
        choices=["all", *PLATFORMS],
        help="Only show one platform",
    )
    list_cmd.add_argument("--sale", action="store_true", help="Only products on sale")
    list_cmd.add_argument(
        "--sort",
        type=parse_sort,
        default=("dateAdded", "desc"),
        help="Sort as FIELD_ORDER (default: dateAdded_desc)",
    )

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        settings = load_settings()
        database_url = args.database_url or settings.database_url

        if args.command == "parse":
            with requests.Session() as session:
                details = parse_product_url(args.url, session=session, timeout=settings.request_timeout)
            print_json(details.to_dict())
            sys.exit(0)

        service = build_service(database_url, settings.request_timeout)

        if args.command == "add":
            if args.force:
                result = service.force_add_tracked_product(args.user_id, args.url)
            else:
                result = service.add_tracked_product(args.user_id, args.url)

            if isinstance(result, SaleNotice):
                print_json(result.to_dict())
                platform_name = get_platform_name(get_platform_from_url(args.url))
                print(f"\nProduct is already on sale on {platform_name}. "
                      "Re-run with --force to track it anyway.", file=sys.stderr)
            else:
                print_json(result.to_dict())

        elif args.command == "remove":
            if args.record:
                if not args.identifier.isdigit():
                    raise ValueError(f"Record ID must be a number, got '{args.identifier}'")
                removed = service.remove_tracked_record(args.user_id, int(args.identifier))
            else:
                removed = service.remove_tracked_product(args.user_id, args.identifier)
            print_json({"success": removed})
            sys.exit(0 if removed else 1)

        elif args.command == "list":
            field, order = args.sort
            products = service.list_tracked_products(
                args.user_id,
                platform=args.platform,
                sale_only=args.sale,
                sort_field=field,
                sort_order=order,
            )
            print_json([p.to_dict() for p in products])

        sys.exit(0)

    except UnsupportedSiteError as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)
    except ScrapeError as e:
        print(f"\nFailed: {e}\nThe storefront may be slow or blocking requests; try again later.", file=sys.stderr)
        sys.exit(1)
    except TrackerError as e:
        print(f"\nFailed: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
