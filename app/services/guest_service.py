"""
Guest service: the entry point the API uses for guest mutations, sync and the live view
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as SchemaError

from app.api.ws import WebSocketManager
from app.core.errors import ConflictError, GuestSyncError, ValidationError
from app.schemas.guest import GuestRecord
from app.services.excel_service import ExcelService
from app.services.guest_gateway import GuestGateway, MutationResult
from app.services.guest_views import (
    ALL_CATEGORIES,
    AttendanceFilter,
    filter_guests,
    summarize,
    visible_guests,
)
from app.services.local_store import LocalGuestStore
from app.services.remote_store import RemoteGuestCollection
from app.services.sync_service import OperationStatus, ResetState, SyncEngine, SyncState

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    imported: int = 0
    duplicates: int = 0
    errors: List[str] = field(default_factory=list)
    sync_status: Optional[str] = None


class GuestService:
    """Wires the gateway and the sync engine to one pair of stores.

    Tracks the last user-visible status string and pushes the guest list to
    WebSocket clients after every local change.
    """

    def __init__(
        self,
        local: LocalGuestStore,
        remote: RemoteGuestCollection,
        websocket_manager: Optional[WebSocketManager] = None,
    ):
        self.local = local
        self.remote = remote
        self.websocket_manager = websocket_manager or WebSocketManager()
        self.gateway = GuestGateway(local, remote)
        self.engine = SyncEngine(local, remote, on_local_change=self.broadcast_guests)
        self.sync_status: str = SyncState.SYNCED.value

    # -------- Reads --------

    async def get_guest(self, guest_id: str) -> Optional[GuestRecord]:
        guest = await self.local.get_by_id(guest_id.strip().lower())
        if guest is None or guest.deleted:
            return None
        return guest

    async def list_guests(
        self,
        category: str = ALL_CATEGORIES,
        attendance: AttendanceFilter = AttendanceFilter.ALL,
        search: str = "",
    ) -> Dict[str, Any]:
        guests = await self.local.get_all()
        return {
            "guests": [g.model_dump() for g in filter_guests(guests, category, attendance, search)],
            "summary": summarize(guests).model_dump(),
            "sync_status": self.sync_status,
        }

    # -------- Mutations --------

    async def add_guest(self, guest: GuestRecord) -> MutationResult:
        try:
            result = await self.gateway.add_guest(guest)
        except ConflictError:
            self.sync_status = "Guest already exists"
            raise
        return await self._after_mutation(result)

    async def update_guest(self, guest_id: str, changes: Dict[str, Any]) -> Optional[MutationResult]:
        existing = await self.get_guest(guest_id)
        if existing is None:
            return None
        try:
            updated = GuestRecord.model_validate({**existing.model_dump(), **changes})
        except SchemaError as e:
            raise ValidationError(f"Invalid guest update: {e.error_count()} invalid field(s)") from e
        if updated.with_normalized_id().id != existing.id:
            raise ValidationError("Changing a guest's name to a different id is not allowed; delete and add instead")
        return await self._after_mutation(await self.gateway.update_guest(updated))

    async def delete_guest(self, guest_id: str) -> Optional[MutationResult]:
        existing = await self.get_guest(guest_id)
        if existing is None:
            return None
        return await self._after_mutation(await self.gateway.delete_guest(existing))

    async def _after_mutation(self, result: MutationResult) -> MutationResult:
        self.sync_status = result.status
        await self.broadcast_guests()
        return result

    # -------- Sync --------

    async def sync_guests(self) -> OperationStatus:
        self.sync_status = SyncState.SYNCING.value
        try:
            status = await self.engine.sync_guests()
        except Exception as e:
            self.sync_status = f"{SyncState.SYNC_FAILED.value}: {e}"
            raise
        self.sync_status = status.message
        return status

    async def reset_all(self) -> OperationStatus:
        self.sync_status = ResetState.RESETTING.value
        try:
            status = await self.engine.reset_all()
        except Exception as e:
            self.sync_status = f"{ResetState.RESET_FAILED.value}: {e}"
            raise
        self.sync_status = status.message
        return status

    async def run_realtime_sync(self) -> None:
        """Background task body; a listener or local store failure ends up in the status string"""
        try:
            await self.engine.run_realtime_sync()
        except GuestSyncError as e:
            logger.error(f"Realtime guest sync stopped: {e}")
            self.sync_status = f"{SyncState.SYNC_FAILED.value}: {e}"

    # -------- Spreadsheets --------

    async def import_guests(self, file_content: bytes) -> ImportResult:
        ok, errors, guests = ExcelService.parse_guests(file_content)
        if not ok:
            return ImportResult(errors=errors)

        result = ImportResult()
        for guest in guests:
            try:
                await self.gateway.add_guest(guest)
                result.imported += 1
            except ConflictError:
                result.duplicates += 1

        logger.info(f"Imported {result.imported} guests ({result.duplicates} already present)")
        result.sync_status = (await self.sync_guests()).message
        await self.broadcast_guests()
        return result

    async def export_guests(self) -> bytes:
        return ExcelService.export_guests(visible_guests(await self.local.get_all()))

    # -------- Live view --------

    async def live_message(self) -> Dict[str, Any]:
        message = await self.list_guests()
        message["type"] = "guests"
        message["timestamp"] = datetime.utcnow().isoformat()
        return message

    async def broadcast_guests(self) -> None:
        if self.websocket_manager.get_connection_count():
            await self.websocket_manager.broadcast(await self.live_message())
