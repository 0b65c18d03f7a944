"""
Tests for single-guest mutations paired with remote writes
"""

import pytest

from app.core.errors import ConflictError, ValidationError
from app.services.guest_gateway import GuestGateway
from app.schemas.guest import GuestRecord

from conftest import FailingCollection, make_guest

@pytest.mark.asyncio
async def test_add_then_get_returns_identical_record(gateway, local_store, remote):
    guest = GuestRecord(name="  Alice ", email="a@x.com", phone_number="555-1", company_name="Acme", category="VIP")

    result = await gateway.add_guest(guest)

    stored = await local_store.get_by_id("alice")
    assert stored is not None
    assert stored.model_dump() == result.guest.model_dump()
    assert stored.deleted is False
    assert stored.email == "a@x.com"
    assert stored.category == "VIP"
    assert result.remote_synced
    assert remote.get("alice").model_dump() == stored.model_dump()

@pytest.mark.asyncio
async def test_blank_name_is_rejected_without_writes(gateway, local_store, remote):
    with pytest.raises(ValidationError):
        await gateway.add_guest(GuestRecord(name="   "))

    assert await local_store.get_all_including_deleted() == []
    assert remote.documents == {}

@pytest.mark.asyncio
async def test_add_existing_id_is_a_conflict(gateway, local_store, remote):
    await gateway.add_guest(GuestRecord(name="Alice", email="first@x.com"))

    with pytest.raises(ConflictError) as exc:
        await gateway.add_guest(GuestRecord(name="ALICE", email="second@x.com"))

    assert exc.value.guest_id == "alice"
    assert str(exc.value) == "Guest already exists"
    assert (await local_store.get_by_id("alice")).email == "first@x.com"
    assert remote.get("alice").email == "first@x.com"

@pytest.mark.asyncio
async def test_update_overwrites_both_replicas(gateway, local_store, remote):
    await gateway.add_guest(GuestRecord(name="Alice"))

    await gateway.update_guest(make_guest("Alice", attending=True, has_gift=True))

    assert (await local_store.get_by_id("alice")).attending is True
    assert remote.get("alice").has_gift is True

@pytest.mark.asyncio
async def test_delete_is_a_soft_delete(gateway, local_store, remote):
    await gateway.add_guest(GuestRecord(name="Alice"))

    result = await gateway.delete_guest(make_guest("Alice"))

    assert result.guest.deleted is True
    stored = await local_store.get_by_id("alice")
    assert stored is not None
    assert stored.deleted is True
    assert await local_store.get_all() == []
    assert remote.get("alice").deleted is True

@pytest.mark.asyncio
async def test_remote_failure_keeps_local_write(local_store):
    gateway = GuestGateway(local_store, FailingCollection(fail_on={"upsert"}))

    result = await gateway.add_guest(GuestRecord(name="Alice"))

    assert not result.remote_synced
    assert result.status == "Sync Failed: network unreachable"
    assert await local_store.get_by_id("alice") is not None
