"""
Persisted tracked product model.

One row per (user_id, product_id). Re-submitting a URL updates the row
in place instead of adding a new one.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, Float, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ..common.constants import DEFAULT_CURRENCY, STATUS_FULLPRICE


class Base(DeclarativeBase):
    pass


class TrackedProduct(Base):
    """Last known price and sale status of a product a user is watching."""

    __tablename__ = "tracked_products"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Ownership and identity
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    product_id: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)

    # Mirrored from the latest scrape
    product_name: Mapped[str] = mapped_column(String(500), nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    sale_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    sale_percent: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=STATUS_FULLPRICE)

    platform: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    currency: Mapped[str] = mapped_column(String(10), nullable=False, default=DEFAULT_CURRENCY)

    # Timestamps (naive UTC)
    date_added: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_user_product"),
    )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys used by the web client."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "productId": self.product_id,
            "url": self.url,
            "productName": self.product_name,
            "category": self.category,
            "price": self.price,
            "salePrice": self.sale_price,
            "salePercent": self.sale_percent,
            "status": self.status,
            "platform": self.platform,
            "currency": self.currency,
            "dateAdded": self.date_added.isoformat() if self.date_added else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<TrackedProduct user={self.user_id} product={self.product_id} status={self.status}>"
