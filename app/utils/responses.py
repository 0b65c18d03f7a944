"""
Standardized response utilities
"""

from typing import Any, Optional
from fastapi import HTTPException, status
from fastapi.responses import JSONResponse

from app.core.errors import ConflictError, GuestSyncError, ValidationError
from app.schemas.common import StandardResponse, ErrorResponse

def success_response(
    message: str,
    data: Any = None,
    status_code: int = 200
) -> JSONResponse:
    """Create standardized success response"""
    response = StandardResponse(
        success=True,
        message=message,
        data=data
    )
    return JSONResponse(
        content=response.model_dump(),
        status_code=status_code
    )

def error_response(
    message: str,
    error_code: Optional[str] = None,
    details: Any = None,
    status_code: int = 400
) -> JSONResponse:
    """Create standardized error response"""
    response = ErrorResponse(
        message=message,
        error_code=error_code,
        details=details
    )
    return JSONResponse(
        content=response.model_dump(),
        status_code=status_code
    )

def guest_error_response(error: GuestSyncError) -> JSONResponse:
    """Map a core error to its HTTP status"""
    if isinstance(error, ValidationError):
        return error_response(str(error), error_code="validation_error", status_code=422)
    if isinstance(error, ConflictError):
        return error_response(str(error), error_code="conflict", details={"id": error.guest_id}, status_code=409)
    return error_response(str(error), error_code="sync_error", status_code=503)

def not_found_error(resource: str = "Resource"):
    """Create not found error"""
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{resource} not found"
    )
