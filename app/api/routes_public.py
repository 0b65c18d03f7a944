"""
Public API routes - health and sync status
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_guest_service
from app.core.config import settings
from app.schemas.common import StatusResponse
from app.services.guest_service import GuestService

router = APIRouter()

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.get("/status", response_model=StatusResponse)
async def sync_status(service: GuestService = Depends(get_guest_service)):
    """Last sync/reset/mutation status shown to the user"""
    return StatusResponse(
        sync_status=service.sync_status,
        realtime_sync=settings.REALTIME_SYNC_ENABLED
    )
