"""
Database engine and session helpers.
"""

import logging
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ..common.settings import load_settings
from .models import Base

logger = logging.getLogger(__name__)


def get_engine(database_url: Optional[str] = None) -> Engine:
    """
    Create an engine for the tracked product store.

    Args:
        database_url: SQLAlchemy URL (defaults to TRACKER_DATABASE_URL)
    """
    url = make_url(database_url or load_settings().database_url)

    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            # One shared connection so every session sees the same in-memory DB
            return create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        # Ensure directory exists
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(url, connect_args={"check_same_thread": False})

    return create_engine(url)


def get_session_factory(engine: Engine) -> sessionmaker:
    """Session factory whose objects stay readable after commit."""
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Initialize the database schema."""
    Base.metadata.create_all(engine)
    logger.debug("Schema ready on %s", engine.url.render_as_string(hide_password=True))
