"""
Persistence for tracked products (SQLAlchemy).
"""

from .database import get_engine, get_session_factory, init_db
from .models import Base, TrackedProduct
from .repository import TrackedProductRepository, utcnow

__all__ = [
    'Base',
    'TrackedProduct',
    'TrackedProductRepository',
    'get_engine',
    'get_session_factory',
    'init_db',
    'utcnow',
]
