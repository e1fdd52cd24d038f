"""
Data models for product extraction.

This module contains pure data classes with no business logic.
The persisted TrackedProduct lives in price_tracker.storage.
"""

from .product import ProductDetails, SaleDetails, SaleNotice

__all__ = ['ProductDetails', 'SaleDetails', 'SaleNotice']
