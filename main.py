"""
Guest Sync - FastAPI Backend
Main application entry point
"""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from app.core.config import settings
from app.api import routes_admin, routes_guest, routes_public, ws
from app.services.guest_service import GuestService
from app.services.local_store import SqlGuestStore
from app.services.remote_store import build_remote_collection

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the local store, wire the services, run the realtime listener"""
    local_store = SqlGuestStore(settings.LOCAL_DATABASE_URL).open()
    service = GuestService(local_store, build_remote_collection())
    app.state.guest_service = service

    if settings.SYNC_ON_STARTUP:
        status = await service.sync_guests()
        logger.info(f"Startup sync: {status}")

    realtime_task = None
    if settings.REALTIME_SYNC_ENABLED:
        realtime_task = asyncio.create_task(service.run_realtime_sync())

    try:
        yield
    finally:
        if realtime_task is not None:
            realtime_task.cancel()
            with suppress(asyncio.CancelledError):
                await realtime_task
        local_store.close()
        logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Guest Sync",
    description="Offline-first guest registration backend with cloud sync",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_guest.router, prefix="/guests", tags=["guests"])
app.include_router(routes_admin.router, prefix="/admin", tags=["admin"])
app.include_router(ws.router, prefix="/ws", tags=["websocket"])

# Note: Run this ASGI app directly with Uvicorn or Hypercorn. For Gunicorn,
# use `uvicorn.workers.UvicornWorker` instead of wrapping the app.

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
