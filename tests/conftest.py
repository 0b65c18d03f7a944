"""
Shared fixtures: a SQLite-backed local store per device and one in-process remote collection
"""

import pytest

from app.core.errors import BatchCommitFailed, RemoteUnavailable
from app.schemas.guest import GuestRecord
from app.services.guest_gateway import GuestGateway
from app.services.local_store import SqlGuestStore
from app.services.remote_store import InMemoryGuestCollection
from app.services.sync_service import SyncEngine


class FailingCollection(InMemoryGuestCollection):
    """Remote collection whose selected operations fail"""

    def __init__(self, fail_on=()):
        super().__init__()
        self.fail_on = set(fail_on)

    async def fetch_all(self):
        if "fetch_all" in self.fail_on:
            raise RemoteUnavailable("network unreachable")
        return await super().fetch_all()

    async def upsert(self, record):
        if "upsert" in self.fail_on:
            raise RemoteUnavailable("network unreachable")
        await super().upsert(record)

    async def batch_upsert(self, records):
        if "batch_upsert" in self.fail_on:
            raise BatchCommitFailed("batch rejected")
        await super().batch_upsert(records)

    async def batch_delete(self, guest_ids):
        if "batch_delete" in self.fail_on:
            raise BatchCommitFailed("batch rejected")
        await super().batch_delete(guest_ids)


def make_guest(name, **fields):
    """A guest record with its id already derived from the name"""
    return GuestRecord(name=name, **fields).with_normalized_id()


@pytest.fixture
def local_store(tmp_path):
    store = SqlGuestStore(f"sqlite:///{tmp_path / 'device_a.db'}").open()
    try:
        yield store
    finally:
        store.close()


@pytest.fixture
def other_device_store(tmp_path):
    store = SqlGuestStore(f"sqlite:///{tmp_path / 'device_b.db'}").open()
    try:
        yield store
    finally:
        store.close()


@pytest.fixture
def remote():
    return InMemoryGuestCollection()


@pytest.fixture
def gateway(local_store, remote):
    return GuestGateway(local_store, remote)


@pytest.fixture
def engine(local_store, remote):
    return SyncEngine(local_store, remote)
