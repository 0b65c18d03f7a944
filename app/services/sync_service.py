"""
Synchronization between the local guest store and the remote collection
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Iterator, List, Optional, Tuple

from app.core.errors import GuestSyncError, LocalStoreError, RemoteUnavailable
from app.schemas.guest import GuestRecord
from app.services.local_store import LocalGuestStore
from app.services.remote_store import ChangeCallback, ErrorCallback, RemoteGuestCollection

logger = logging.getLogger(__name__)


class SyncState(str, Enum):
    SYNCED = "Synced"
    SYNCING = "Syncing..."
    SYNC_FAILED = "Sync Failed"


class ResetState(str, Enum):
    RESETTING = "Resetting..."
    RESET_SUCCESSFUL = "Reset Successful"
    RESET_FAILED = "Reset Failed"


@dataclass(frozen=True)
class OperationStatus:
    """Outcome of a sync or reset, rendered as a short status string"""
    state: Enum
    reason: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.state in (SyncState.SYNC_FAILED, ResetState.RESET_FAILED)

    @property
    def message(self) -> str:
        if self.reason:
            return f"{self.state.value}: {self.reason}"
        return self.state.value

    def __str__(self) -> str:
        return self.message


class SyncEngine:
    """Reconciles the two replicas; keeps no state between runs.

    One-shot sync pushes every local record, then only fills gaps and
    applies tombstones on the way back. Realtime sync lets every remote
    change overwrite the local row.
    """

    def __init__(
        self,
        local: LocalGuestStore,
        remote: RemoteGuestCollection,
        on_local_change: Optional[Callable[[], Awaitable[None]]] = None,
    ):
        self.local = local
        self.remote = remote
        self.on_local_change = on_local_change

    # -------- One-shot --------

    async def sync_guests(self) -> OperationStatus:
        try:
            pushed = await self._push()
            inserted, removed = await self._pull()
        except GuestSyncError as e:
            logger.error(f"Guest sync failed: {e}")
            return OperationStatus(SyncState.SYNC_FAILED, str(e))

        logger.info(f"Guest sync complete: pushed={pushed} inserted={inserted} removed={removed}")
        if inserted or removed:
            await self._notify()
        return OperationStatus(SyncState.SYNCED)

    async def _push(self) -> int:
        records = [g for g in await self.local.get_all_including_deleted() if g.id.strip()]
        await self.remote.batch_upsert(records)
        return len(records)

    async def _pull(self) -> Tuple[int, int]:
        inserted = removed = 0
        for guest in await self.remote.fetch_all():
            if not guest.id.strip():
                continue
            if guest.deleted:
                if await self.local.get_by_id(guest.id) is not None:
                    removed += 1
                await self.local.delete(guest)
            elif await self.local.get_by_id(guest.id) is None:
                await self.local.upsert(guest)
                inserted += 1
        return inserted, removed

    # -------- Realtime --------

    async def apply_remote_changes(self, guests: List[GuestRecord]) -> None:
        """Apply one delivered batch, in delivery order"""
        for guest in guests:
            if not guest.id.strip():
                continue
            local_guest = await self.local.get_by_id(guest.id)
            if guest.deleted:
                if local_guest is not None:
                    await self.local.delete(local_guest)
                    logger.debug(f"Realtime: removed tombstoned guest {guest.id}")
            elif local_guest is None:
                await self.local.upsert(guest)
                logger.debug(f"Realtime: inserted guest {guest.id}")
            else:
                await self.local.upsert(guest)
                logger.debug(f"Realtime: updated guest {guest.id}")
        await self._notify()

    @contextmanager
    def subscription(self, on_change: ChangeCallback, on_error: ErrorCallback) -> Iterator[None]:
        """Hold a remote subscription for the duration of the block"""
        handle = self.remote.subscribe(on_change, on_error)
        try:
            yield
        finally:
            handle.unsubscribe()
            logger.info("Realtime guest subscription released")

    async def run_realtime_sync(self) -> None:
        """Apply remote changes until cancelled; a stream error raises RemoteUnavailable"""
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue = asyncio.Queue()

        def on_change(guests: List[GuestRecord]) -> None:
            loop.call_soon_threadsafe(queue.put_nowait, (guests, None))

        def on_error(error: Exception) -> None:
            loop.call_soon_threadsafe(queue.put_nowait, (None, error))

        with self.subscription(on_change, on_error):
            logger.info("Realtime guest sync started")
            while True:
                guests, error = await queue.get()
                if error is not None:
                    raise RemoteUnavailable(f"Realtime listener failed: {error}") from error
                await self.apply_remote_changes(guests)

    # -------- Wipe --------

    async def reset_all(self) -> OperationStatus:
        """Delete every remote document, then clear the local store"""
        try:
            remote_ids = [g.id for g in await self.remote.fetch_all()]
            await self.remote.batch_delete(remote_ids)
        except RemoteUnavailable as e:
            logger.error(f"Reset aborted, remote collection not cleared: {e}")
            return OperationStatus(ResetState.RESET_FAILED, str(e))

        try:
            await self.local.clear()
        except LocalStoreError as e:
            logger.error(f"Remote collection cleared but local store was not: {e}")
            return OperationStatus(ResetState.RESET_FAILED, str(e))

        logger.info(f"Reset complete: {len(remote_ids)} remote guests deleted")
        await self._notify()
        return OperationStatus(ResetState.RESET_SUCCESSFUL)

    async def _notify(self) -> None:
        if self.on_local_change is not None:
            await self.on_local_change()
