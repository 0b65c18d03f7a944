"""
Mutation gateway: every local guest write paired with a remote write
"""

import logging
from dataclasses import dataclass

from app.core.errors import ConflictError, RemoteUnavailable, ValidationError
from app.schemas.guest import GuestRecord
from app.services.local_store import LocalGuestStore
from app.services.remote_store import RemoteGuestCollection

logger = logging.getLogger(__name__)

SYNCED = "Synced"


@dataclass(frozen=True)
class MutationResult:
    """The committed local record and the outcome of its remote write"""
    guest: GuestRecord
    status: str = SYNCED

    @property
    def remote_synced(self) -> bool:
        return self.status == SYNCED


class GuestGateway:
    """Writes locally first, then to the remote collection.

    A failed remote write never rolls back the local one; the next
    ``sync_guests`` pushes it again.
    """

    def __init__(self, local: LocalGuestStore, remote: RemoteGuestCollection):
        self.local = local
        self.remote = remote

    @staticmethod
    def prepare(guest: GuestRecord) -> GuestRecord:
        """Reject blank names and derive the id from the name"""
        if not guest.name or not guest.name.strip():
            raise ValidationError("Guest name must not be blank")
        return guest.with_normalized_id()

    async def add_guest(self, guest: GuestRecord) -> MutationResult:
        record = self.prepare(guest)
        if await self.local.get_by_id(record.id) is not None:
            raise ConflictError(record.id)
        return await self._write(record)

    async def update_guest(self, guest: GuestRecord) -> MutationResult:
        return await self._write(self.prepare(guest))

    async def delete_guest(self, guest: GuestRecord) -> MutationResult:
        record = self.prepare(guest).model_copy(update={"deleted": True})
        return await self._write(record)

    async def _write(self, record: GuestRecord) -> MutationResult:
        await self.local.upsert(record)
        try:
            await self.remote.upsert(record)
        except RemoteUnavailable as e:
            logger.warning(f"Guest {record.id} saved locally but not remotely: {e}")
            return MutationResult(guest=record, status=f"Sync Failed: {e}")
        return MutationResult(guest=record)
