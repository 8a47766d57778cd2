"""
Public routes - no authentication required
"""

from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import RedirectResponse, Response

from table_manager.services.excel_service import ExcelService

router = APIRouter()

@router.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "OK", "timestamp": datetime.utcnow().isoformat()}

@router.get("/guest/{token}")
async def guest_redirect(token: str):
    """Send scanned QR links to the single-page app's guest route"""
    return RedirectResponse(url=f"/#/guest/{token}")

@router.get("/api/template/guest_list_template.xlsx")
async def download_roster_template():
    """Download the roster spreadsheet template"""
    template_bytes = ExcelService.create_template()
    
    return Response(
        content=template_bytes,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=guest_list_template.xlsx"}
    )
