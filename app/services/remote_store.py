"""
Remote guest collection: the contract the sync core depends on, a Firestore
implementation and an in-process collection for offline runs and tests.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence

from google.api_core.exceptions import GoogleAPIError
from pydantic import ValidationError as SchemaError

from app.core.config import settings
from app.core.errors import BatchCommitFailed, RemoteUnavailable
from app.schemas.guest import GuestRecord

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[List[GuestRecord]], None]
ErrorCallback = Callable[[Exception], None]


def decode_document(doc_id: str, data: Optional[Dict[str, Any]]) -> GuestRecord:
    """Remote document to record; a malformed document is a remote failure"""
    try:
        return GuestRecord.from_document(doc_id, data)
    except SchemaError as e:
        raise RemoteUnavailable(f"Malformed guest document '{doc_id}': {e.error_count()} invalid field(s)") from e


class Subscription(ABC):
    """Handle for a standing change subscription"""

    @abstractmethod
    def unsubscribe(self) -> None:
        """Release the listener; safe to call more than once"""


class RemoteGuestCollection(ABC):
    """Networked document collection of guests keyed by guest id.

    Batches are all-or-nothing: a failed batch raises ``BatchCommitFailed``
    and none of its writes are applied.
    """

    @abstractmethod
    async def fetch_all(self) -> List[GuestRecord]:
        ...

    @abstractmethod
    async def upsert(self, record: GuestRecord) -> None:
        """Set one document with the full record"""

    @abstractmethod
    async def batch_upsert(self, records: Sequence[GuestRecord]) -> None:
        ...

    @abstractmethod
    async def batch_delete(self, guest_ids: Sequence[str]) -> None:
        ...

    @abstractmethod
    def subscribe(self, on_change: ChangeCallback, on_error: ErrorCallback) -> Subscription:
        """Deliver batches of changed records until unsubscribed.

        Callbacks may run on a foreign thread.
        """


# -------- Firestore --------

class _FirestoreSubscription(Subscription):
    def __init__(self, watch):
        self._watch = watch

    def unsubscribe(self) -> None:
        if self._watch is not None:
            self._watch.unsubscribe()
            self._watch = None


class FirestoreGuestCollection(RemoteGuestCollection):
    """Guests stored as documents of one top-level Firestore collection"""

    def __init__(self, client, collection_name: str = "guests"):
        self.client = client
        self.collection_name = collection_name

    @property
    def collection(self):
        return self.client.collection(self.collection_name)

    async def fetch_all(self) -> List[GuestRecord]:
        try:
            docs = self.collection.get()
        except GoogleAPIError as e:
            raise RemoteUnavailable(f"Could not read guests: {e}") from e
        return [decode_document(doc.id, doc.to_dict()) for doc in docs if doc.id.strip()]

    async def upsert(self, record: GuestRecord) -> None:
        try:
            self.collection.document(record.id).set(record.to_document())
        except GoogleAPIError as e:
            raise RemoteUnavailable(f"Could not write guest {record.id}: {e}") from e

    async def batch_upsert(self, records: Sequence[GuestRecord]) -> None:
        if not records:
            return
        batch = self.client.batch()
        for record in records:
            batch.set(self.collection.document(record.id), record.to_document())
        try:
            batch.commit()
        except GoogleAPIError as e:
            raise BatchCommitFailed(f"Batch upsert of {len(records)} guests failed: {e}") from e

    async def batch_delete(self, guest_ids: Sequence[str]) -> None:
        if not guest_ids:
            return
        batch = self.client.batch()
        for guest_id in guest_ids:
            batch.delete(self.collection.document(guest_id))
        try:
            batch.commit()
        except GoogleAPIError as e:
            raise BatchCommitFailed(f"Batch delete of {len(guest_ids)} guests failed: {e}") from e

    def subscribe(self, on_change: ChangeCallback, on_error: ErrorCallback) -> Subscription:
        def on_snapshot(col_snapshot, changes, read_time):
            # Removed documents only come from a wipe; the wipe clears the local store itself.
            try:
                records = [
                    decode_document(change.document.id, change.document.to_dict())
                    for change in changes
                    if change.type.name in ("ADDED", "MODIFIED") and change.document.id.strip()
                ]
            except RemoteUnavailable as e:
                on_error(e)
                return
            if records:
                on_change(records)

        try:
            watch = self.collection.on_snapshot(on_snapshot)
        except GoogleAPIError as e:
            raise RemoteUnavailable(f"Could not subscribe to guests: {e}") from e
        logger.info(f"Listening for changes on Firestore collection '{self.collection_name}'")
        return _FirestoreSubscription(watch)


# -------- In-process collection --------

class _InMemorySubscription(Subscription):
    def __init__(self, collection: "InMemoryGuestCollection", listener):
        self._collection = collection
        self._listener = listener

    def unsubscribe(self) -> None:
        if self._listener is not None:
            self._collection._listeners.remove(self._listener)
            self._listener = None


class InMemoryGuestCollection(RemoteGuestCollection):
    """Process-local stand-in for the cloud collection.

    Listeners receive the current documents on subscribe, then only the
    documents whose content actually changed, as Firestore does.
    """

    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = {}
        self._listeners: List[tuple] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

    def get(self, guest_id: str) -> Optional[GuestRecord]:
        data = self.documents.get(guest_id)
        return decode_document(guest_id, data) if data is not None else None

    async def fetch_all(self) -> List[GuestRecord]:
        return [decode_document(doc_id, data) for doc_id, data in self.documents.items()]

    async def upsert(self, record: GuestRecord) -> None:
        self._write([record])

    async def batch_upsert(self, records: Sequence[GuestRecord]) -> None:
        self._write(records)

    async def batch_delete(self, guest_ids: Sequence[str]) -> None:
        for guest_id in guest_ids:
            self.documents.pop(guest_id, None)

    def subscribe(self, on_change: ChangeCallback, on_error: ErrorCallback) -> Subscription:
        listener = (on_change, on_error)
        self._listeners.append(listener)
        if self.documents:
            on_change([decode_document(doc_id, data) for doc_id, data in self.documents.items()])
        return _InMemorySubscription(self, listener)

    def _write(self, records: Sequence[GuestRecord]) -> None:
        changed = []
        for record in records:
            document = record.to_document()
            if self.documents.get(record.id) != document:
                self.documents[record.id] = document
                changed.append(decode_document(record.id, document))
        if changed:
            for on_change, _ in list(self._listeners):
                on_change(changed)


def build_remote_collection() -> RemoteGuestCollection:
    """Firestore when Firebase is enabled, otherwise an in-process collection"""
    if settings.USE_FIREBASE:
        from app.services.firebase_client import get_firestore_client
        return FirestoreGuestCollection(get_firestore_client(), settings.GUESTS_COLLECTION)

    logger.warning("USE_FIREBASE is off; guests are synced with an in-process collection only")
    return InMemoryGuestCollection()
