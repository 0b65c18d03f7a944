"""
Request-scoped access to the objects built in the application lifespan
"""

from fastapi import Request

from app.services.guest_service import GuestService


def get_guest_service(request: Request) -> GuestService:
    return request.app.state.guest_service
