"""
Admin API routes - sync, reset and spreadsheet import/export
"""

import time
from fastapi import APIRouter, Depends, UploadFile, File
from fastapi.responses import Response

from app.api.deps import get_guest_service
from app.core.config import settings
from app.services.excel_service import ExcelService
from app.services.guest_service import GuestService
from app.utils.responses import success_response, error_response

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

@router.post("/sync")
async def sync_guests(service: GuestService = Depends(get_guest_service)):
    """Push every local guest, then pull missing guests and tombstones"""
    status = await service.sync_guests()
    if status.failed:
        return error_response(message=status.message, error_code="sync_failed", status_code=503)
    return success_response(message=status.message, data={"sync_status": status.message})

@router.post("/reset")
async def reset_all(service: GuestService = Depends(get_guest_service)):
    """Delete every guest from the remote collection, then from the local store"""
    status = await service.reset_all()
    if status.failed:
        return error_response(message=status.message, error_code="reset_failed", status_code=503)
    return success_response(message=status.message, data={"sync_status": status.message})

@router.post("/import")
async def import_excel(
    file: UploadFile = File(...),
    service: GuestService = Depends(get_guest_service)
):
    """Upload an Excel guest list"""
    if not file.filename or not file.filename.endswith(('.xlsx', '.xls')):
        return error_response(
            message="Invalid file format. Please upload an Excel file (.xlsx or .xls)",
            status_code=400
        )

    file_content = await file.read()
    if len(file_content) > settings.MAX_UPLOAD_SIZE:
        return error_response(message="File too large", status_code=413)

    result = await service.import_guests(file_content)
    if result.errors:
        return error_response(
            message="Excel file validation failed",
            details=result.errors,
            status_code=422
        )

    return success_response(
        message=f"Excel file processed successfully. {result.imported} guests imported.",
        data={
            "imported": result.imported,
            "duplicates": result.duplicates,
            "sync_status": result.sync_status,
            "filename": file.filename
        }
    )

@router.get("/export")
async def export_excel(service: GuestService = Depends(get_guest_service)):
    """Export the current guest list to Excel"""
    content = await service.export_guests()
    filename = f"GuestList_{int(time.time() * 1000)}.xlsx"
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )

@router.get("/template")
async def download_template():
    """Download a blank import template"""
    return Response(
        content=ExcelService.create_template(),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": "attachment; filename=guest_import_template.xlsx"}
    )
