"""
Price Tracker

Scrapes product pages from supported Ukrainian storefronts and keeps a
per-user record of their latest price and sale status.

Modules:
    models      - Data models (ProductDetails, SaleNotice)
    common      - Shared utilities (config loader, settings, price parsing, logging)
    extraction  - Platform detection, product identity and site extractors
    storage     - SQLAlchemy persistence for tracked products
    tracking    - Add / force-add / remove / list workflow
"""
