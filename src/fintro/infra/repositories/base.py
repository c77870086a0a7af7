"""Owner-scoped SQLModel repository shared by every finance record type."""

from __future__ import annotations

from typing import Any, ClassVar, Generic, Optional, Sequence, TypeVar
from uuid import uuid4

from sqlmodel import SQLModel, select

from ...logging_config import get_logger
from ..database import SessionFactory
from ..realtime import ChangeFeed

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=SQLModel)


class SQLModelRecordRepository(Generic[RecordT]):
    """CRUD for one per-user sub-collection.

    Subclasses set ``model``, ``collection`` and ``ordering``. Every write
    notifies the change feed so live listeners get a new snapshot.
    """

    model: ClassVar[type[SQLModel]]
    collection: ClassVar[str]
    ordering: ClassVar[Sequence[Any]] = ()

    def __init__(self, session_factory: SessionFactory, change_feed: ChangeFeed | None = None):
        """Initialize with a session factory and an optional change feed."""
        self.session_factory = session_factory
        self.change_feed = change_feed

    def _owned(self, *, user_id: str):
        return select(self.model).where(self.model.user_id == user_id)  # type: ignore[attr-defined]

    def list_all(self, *, user_id: str) -> list[RecordT]:
        """Return the user's records in collection order."""
        with self.session_factory() as session:
            statement = self._owned(user_id=user_id)
            if self.ordering:
                statement = statement.order_by(*self.ordering)
            return list(session.exec(statement).all())

    def get_by_id(self, record_id: str, *, user_id: str) -> Optional[RecordT]:
        with self.session_factory() as session:
            statement = self._owned(user_id=user_id).where(
                self.model.id == record_id  # type: ignore[attr-defined]
            )
            return session.exec(statement).first()

    def create(self, record: RecordT, *, user_id: str) -> RecordT:
        """Insert ``record`` under ``user_id`` with a freshly assigned id."""
        with self.session_factory() as session:
            record.id = uuid4().hex  # type: ignore[attr-defined]
            record.user_id = user_id  # type: ignore[attr-defined]
            session.add(record)
            session.commit()
            session.refresh(record)
        logger.info(
            "Record created",
            extra={"collection": self.collection, "record_id": record.id},  # type: ignore[attr-defined]
        )
        self._publish(user_id)
        return record

    def update(self, record: RecordT, *, user_id: str) -> RecordT:
        """Overwrite every field of the stored record with ``record``'s values."""
        record_id = getattr(record, "id", None)
        if not record_id:
            raise ValueError(f"Cannot update {self.collection} record without an id")
        with self.session_factory() as session:
            existing = session.exec(
                self._owned(user_id=user_id).where(self.model.id == record_id)  # type: ignore[attr-defined]
            ).first()
            if existing is None:
                raise ValueError(f"{self.collection} record {record_id} not found")
            existing.sqlmodel_update(record.model_dump(exclude={"id", "user_id"}))
            session.add(existing)
            session.commit()
            session.refresh(existing)
        logger.info("Record updated", extra={"collection": self.collection, "record_id": record_id})
        self._publish(user_id)
        return existing

    def delete(self, record_id: str, *, user_id: str) -> bool:
        """Delete by id; returns False when nothing matched."""
        with self.session_factory() as session:
            existing = session.exec(
                self._owned(user_id=user_id).where(self.model.id == record_id)  # type: ignore[attr-defined]
            ).first()
            if existing is None:
                return False
            session.delete(existing)
            session.commit()
        logger.info("Record deleted", extra={"collection": self.collection, "record_id": record_id})
        self._publish(user_id)
        return True

    def _publish(self, user_id: str) -> None:
        if self.change_feed is not None:
            self.change_feed.notify(self.collection, user_id)
