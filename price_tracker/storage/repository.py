"""
Tracked Product Repository

Persistence for tracked products keyed by (user_id, product_id).
Every public method runs in its own transaction and rolls back on failure,
so a failed call never leaves a half-written record.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..exceptions import PersistenceError
from .models import TrackedProduct

logger = logging.getLogger(__name__)

# Columns refreshed on every re-scrape
UPDATABLE_FIELDS = (
    "url",
    "product_name",
    "category",
    "price",
    "sale_price",
    "sale_percent",
    "status",
    "platform",
    "currency",
)


def utcnow() -> datetime:
    """Current time as naive UTC (what the DateTime columns store)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TrackedProductRepository:
    """
    Repository for tracked products.

    Usage:
        repo = TrackedProductRepository(get_session_factory(engine))
        record, created = repo.upsert("42", "steam_730", fields)
        repo.delete("42", "steam_730")
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._session_factory = session_factory
        self._clock = clock

    # ── Reads ─────────────────────────────────────────────────────────────────

    def find_one(self, user_id: str, product_id: str) -> Optional[TrackedProduct]:
        """Find the record for (user_id, product_id)."""
        try:
            with self._session_factory() as session:
                return self._find(session, user_id, product_id)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to read tracked product: {e}") from e

    def get_by_id(self, record_id: int) -> Optional[TrackedProduct]:
        """Fetch a record by its surrogate id."""
        try:
            with self._session_factory() as session:
                return session.get(TrackedProduct, record_id)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to read tracked product: {e}") from e

    def list_for_user(self, user_id: str) -> List[TrackedProduct]:
        """All records owned by a user, oldest first."""
        try:
            with self._session_factory() as session:
                stmt = (
                    select(TrackedProduct)
                    .where(TrackedProduct.user_id == user_id)
                    .order_by(TrackedProduct.id)
                )
                return list(session.scalars(stmt))
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to list tracked products: {e}") from e

    # ── Writes ────────────────────────────────────────────────────────────────

    def insert(self, user_id: str, product_id: str, fields: Dict[str, Any]) -> TrackedProduct:
        """
        Insert a new record with date_added = updated_at = now.

        Raises:
            PersistenceError: On any store failure, including a duplicate key
        """
        now = self._clock()
        record = TrackedProduct(
            user_id=user_id,
            product_id=product_id,
            date_added=now,
            updated_at=now,
            **self._pick(fields),
        )
        try:
            with self._session_factory() as session, session.begin():
                session.add(record)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to insert tracked product: {e}") from e
        return record

    def update(self, user_id: str, product_id: str, fields: Dict[str, Any]) -> Optional[TrackedProduct]:
        """
        Overwrite the scraped fields of an existing record and bump updated_at.

        date_added is never touched.

        Returns:
            The updated record, or None if it does not exist
        """
        try:
            with self._session_factory() as session, session.begin():
                record = self._find(session, user_id, product_id)
                if record is None:
                    return None
                self._apply(record, fields)
                return record
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to update tracked product: {e}") from e

    def upsert(self, user_id: str, product_id: str, fields: Dict[str, Any]) -> Tuple[TrackedProduct, bool]:
        """
        Insert the record, or update it in place when it already exists.

        A concurrent insert of the same key loses on the unique constraint
        and is retried as an update.

        Returns:
            (record, created)
        """
        try:
            with self._session_factory() as session, session.begin():
                record = self._find(session, user_id, product_id)
                if record is not None:
                    self._apply(record, fields)
                    return record, False

                now = self._clock()
                record = TrackedProduct(
                    user_id=user_id,
                    product_id=product_id,
                    date_added=now,
                    updated_at=now,
                    **self._pick(fields),
                )
                session.add(record)
                session.flush()
                return record, True
        except IntegrityError:
            logger.warning("Concurrent insert for %s/%s, retrying as update", user_id, product_id)
            record = self.update(user_id, product_id, fields)
            if record is None:
                raise PersistenceError(
                    f"Tracked product {product_id} vanished during upsert"
                )
            return record, False
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to save tracked product: {e}") from e

    def delete(self, user_id: str, identifier: str) -> bool:
        """
        Delete one of the user's records by product identifier.

        The identifier is resolved in order as: generated product_id,
        platform-native id (e.g. a Steam app id). Record ids are a separate
        id space, see delete_by_record_id.

        Returns:
            True if a record was deleted, False if none matched
        """
        try:
            with self._session_factory() as session, session.begin():
                record = self._resolve(session, user_id, identifier)
                if record is None:
                    return False
                session.delete(record)
                logger.info("Deleted tracked product %s for user %s", record.product_id, user_id)
                return True
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to delete tracked product: {e}") from e

    def delete_by_record_id(self, user_id: str, record_id: int) -> bool:
        """
        Delete one of the user's records by its surrogate id.

        Returns:
            True if a record was deleted, False if it does not exist or
            belongs to another user
        """
        try:
            with self._session_factory() as session, session.begin():
                record = session.get(TrackedProduct, record_id)
                if record is None or record.user_id != user_id:
                    return False
                session.delete(record)
                logger.info("Deleted tracked record %s for user %s", record_id, user_id)
                return True
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to delete tracked product: {e}") from e

    # ── Helpers ───────────────────────────────────────────────────────────────

    @staticmethod
    def _find(session: Session, user_id: str, product_id: str) -> Optional[TrackedProduct]:
        stmt = select(TrackedProduct).where(
            TrackedProduct.user_id == user_id,
            TrackedProduct.product_id == product_id,
        )
        return session.scalars(stmt).first()

    def _resolve(self, session: Session, user_id: str, identifier: str) -> Optional[TrackedProduct]:
        record = self._find(session, user_id, identifier)
        if record is not None:
            return record

        # Platform-native id: the suffix after "{platform or host}_"
        stmt = (
            select(TrackedProduct)
            .where(TrackedProduct.user_id == user_id)
            .order_by(TrackedProduct.id)
        )
        for candidate in session.scalars(stmt):
            if candidate.product_id.endswith(f"_{identifier}"):
                return candidate
        return None

    def _apply(self, record: TrackedProduct, fields: Dict[str, Any]) -> None:
        for name, value in self._pick(fields).items():
            setattr(record, name, value)
        record.updated_at = self._clock()

    @staticmethod
    def _pick(fields: Dict[str, Any]) -> Dict[str, Any]:
        return {name: fields[name] for name in UPDATABLE_FIELDS if name in fields}
