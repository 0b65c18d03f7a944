"""
Local guest store: the contract the sync core depends on and its SQLAlchemy implementation
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.db import Base, create_db_engine
from app.core.errors import LocalStoreError
from app.models import Guest
from app.schemas.guest import GuestRecord

logger = logging.getLogger(__name__)


class LocalGuestStore(ABC):
    """Durable device-local guest storage keyed by guest id.

    Every single-record call must be atomic; the sync engine and the
    realtime listener may call concurrently.
    """

    @abstractmethod
    async def get_all(self) -> List[GuestRecord]:
        """Non-deleted guests"""

    @abstractmethod
    async def get_all_including_deleted(self) -> List[GuestRecord]:
        """Every guest, tombstones included"""

    @abstractmethod
    async def get_by_id(self, guest_id: str) -> Optional[GuestRecord]:
        """A guest by id, tombstoned or not"""

    @abstractmethod
    async def upsert(self, record: GuestRecord) -> None:
        ...

    @abstractmethod
    async def delete(self, record: GuestRecord) -> None:
        """Physically remove a guest; no-op when absent"""

    @abstractmethod
    async def clear(self) -> None:
        ...


class SqlGuestStore(LocalGuestStore):
    """SQLAlchemy-backed local store with an explicit open/close lifecycle"""

    def __init__(self, database_url: str):
        self.database_url = database_url
        self._engine = None
        self._session_factory: Optional[sessionmaker] = None

    def open(self) -> "SqlGuestStore":
        if self._engine is None:
            self._engine = create_db_engine(self.database_url)
            Base.metadata.create_all(bind=self._engine)
            self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self._engine)
            logger.info(f"Local guest store opened at {self.database_url}")
        return self

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Local guest store closed")

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """One transaction per call"""
        if self._session_factory is None:
            raise LocalStoreError("Local guest store is not open")
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise LocalStoreError(f"Local store error: {e}") from e
        finally:
            db.close()

    async def get_all(self) -> List[GuestRecord]:
        with self._session() as db:
            rows = db.query(Guest).filter(Guest.deleted == False).order_by(Guest.id).all()
            return [row.to_record() for row in rows]

    async def get_all_including_deleted(self) -> List[GuestRecord]:
        with self._session() as db:
            return [row.to_record() for row in db.query(Guest).order_by(Guest.id).all()]

    async def get_by_id(self, guest_id: str) -> Optional[GuestRecord]:
        with self._session() as db:
            row = db.query(Guest).filter(Guest.id == guest_id).first()
            return row.to_record() if row else None

    async def upsert(self, record: GuestRecord) -> None:
        with self._session() as db:
            db.merge(Guest.from_record(record))

    async def delete(self, record: GuestRecord) -> None:
        with self._session() as db:
            db.query(Guest).filter(Guest.id == record.id).delete()

    async def clear(self) -> None:
        with self._session() as db:
            removed = db.query(Guest).delete()
        logger.info(f"Cleared {removed} guests from the local store")
