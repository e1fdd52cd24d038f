"""
Product data models.

Pure data classes for representing scraped product information.
No business logic beyond keeping the status fields consistent.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..common.constants import STATUS_FULLPRICE, STATUS_SALE, STATUSES


@dataclass
class ProductDetails:
    """
    Normalized result of scraping one product page.

    Exactly one of three states:
    - fullprice: price is the current price, no sale fields
    - sale: price is the original price, sale_price/sale_percent set
    - free: price is 0, no sale fields
    """
    product_name: str
    category: str
    price: float = 0.0
    sale_price: Optional[float] = None
    sale_percent: Optional[int] = None
    status: str = STATUS_FULLPRICE

    def __post_init__(self):
        """Enforce status invariants after initialization."""
        if self.status not in STATUSES:
            raise ValueError(f"Unknown product status: {self.status}")
        if self.price is None or self.price < 0:
            self.price = 0.0
        # Sale fields only make sense while on sale
        if self.status != STATUS_SALE:
            self.sale_price = None
            self.sale_percent = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys used by the web client."""
        return {
            "productName": self.product_name,
            "category": self.category,
            "price": self.price,
            "salePrice": self.sale_price,
            "salePercent": self.sale_percent,
            "status": self.status,
        }


@dataclass
class SaleDetails:
    """Prices shown to the user when a new product is already discounted."""
    original_price: float
    sale_price: Optional[float]
    sale_percent: Optional[int]
    product_name: str


@dataclass
class SaleNotice:
    """
    Returned instead of a tracked product when the sale gate fires.

    The caller is expected to ask the user for confirmation and then use
    the force-add path.
    """
    sale_details: SaleDetails
    message: str = "Product is already on sale!"
    already_on_sale: bool = field(default=True, init=False)

    @classmethod
    def from_details(cls, details: ProductDetails) -> "SaleNotice":
        return cls(sale_details=SaleDetails(
            original_price=details.price,
            sale_price=details.sale_price,
            sale_percent=details.sale_percent,
            product_name=details.product_name,
        ))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "alreadyOnSale": self.already_on_sale,
            "message": self.message,
            "saleDetails": {
                "originalPrice": self.sale_details.original_price,
                "salePrice": self.sale_details.sale_price,
                "salePercent": self.sale_details.sale_percent,
                "productName": self.sale_details.product_name,
            },
        }
