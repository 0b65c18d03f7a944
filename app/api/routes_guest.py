"""
Guest CRUD API routes
"""

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_guest_service
from app.core.errors import GuestSyncError
from app.schemas.guest import GuestCreate, GuestRecord, GuestUpdate
from app.services.guest_gateway import MutationResult
from app.services.guest_service import GuestService
from app.services.guest_views import ALL_CATEGORIES, AttendanceFilter
from app.utils.responses import success_response, guest_error_response, not_found_error

router = APIRouter()

def _mutation_data(result: MutationResult) -> dict:
    return {
        "guest": result.guest.model_dump(),
        "remote_synced": result.remote_synced,
        "sync_status": result.status,
    }

@router.get("")
async def list_guests(
    search: str = Query(""),
    category: str = Query(ALL_CATEGORIES),
    attendance: AttendanceFilter = Query(AttendanceFilter.ALL),
    service: GuestService = Depends(get_guest_service)
):
    """List non-deleted guests, filtered, with aggregate counts"""
    data = await service.list_guests(category=category, attendance=attendance, search=search)
    return success_response(message="Guests retrieved successfully", data=data)

@router.get("/{guest_id}")
async def get_guest(
    guest_id: str,
    service: GuestService = Depends(get_guest_service)
):
    guest = await service.get_guest(guest_id)
    if guest is None:
        raise not_found_error("Guest")
    return success_response(message="Guest retrieved", data=guest.model_dump())

@router.post("")
async def add_guest(
    guest_data: GuestCreate,
    service: GuestService = Depends(get_guest_service)
):
    """Add a guest; its id is derived from the name"""
    try:
        result = await service.add_guest(GuestRecord(**guest_data.model_dump()))
    except GuestSyncError as e:
        return guest_error_response(e)

    return success_response(
        message="Guest added successfully",
        data=_mutation_data(result),
        status_code=201
    )

@router.put("/{guest_id}")
async def update_guest(
    guest_id: str,
    guest_update: GuestUpdate,
    service: GuestService = Depends(get_guest_service)
):
    """Update guest fields, including attendance and swag flags"""
    try:
        result = await service.update_guest(guest_id, guest_update.model_dump(exclude_unset=True, exclude_none=True))
    except GuestSyncError as e:
        return guest_error_response(e)

    if result is None:
        raise not_found_error("Guest")

    return success_response(message="Guest updated successfully", data=_mutation_data(result))

@router.delete("/{guest_id}")
async def delete_guest(
    guest_id: str,
    service: GuestService = Depends(get_guest_service)
):
    """Mark a guest as deleted; the tombstone propagates on sync"""
    try:
        result = await service.delete_guest(guest_id)
    except GuestSyncError as e:
        return guest_error_response(e)

    if result is None:
        raise not_found_error("Guest")

    return success_response(message="Guest deleted successfully", data=_mutation_data(result))
