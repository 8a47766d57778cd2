"""
Guest-facing API routes, keyed by the party's token
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from sqlalchemy.orm import Session

from table_manager.core.db import get_db
from table_manager.services.guest_service import GuestService
from table_manager.services.qr_service import QRService
from table_manager.utils.security import rate_limit_check, get_client_ip
from table_manager.utils.responses import success_response, rate_limit_error

router = APIRouter()

@router.get("/{token}")
async def resolve_guest(token: str, request: Request, db: Session = Depends(get_db)):
    """Look up the guest's own party, table and event"""
    if not rate_limit_check(get_client_ip(request)):
        return rate_limit_error()
    
    return success_response(
        message="Guest information found",
        data=GuestService.resolve_guest(db, token)
    )

@router.get("/{token}/layout")
async def resolve_guest_layout(token: str, request: Request, db: Session = Depends(get_db)):
    """Hall layout with the guest's table highlighted"""
    if not rate_limit_check(get_client_ip(request)):
        return rate_limit_error()
    
    return success_response(
        message="Layout retrieved",
        data=GuestService.resolve_layout(db, token)
    )

@router.get("/{token}/qr.png")
async def guest_qr(token: str, request: Request, db: Session = Depends(get_db)):
    """QR code pointing at the guest's page"""
    if not rate_limit_check(get_client_ip(request)):
        return rate_limit_error()
    
    GuestService.resolve_guest(db, token)
    qr_bytes = QRService.generate_guest_qr(token)
    
    return Response(
        content=qr_bytes,
        media_type="image/png",
        headers={"Content-Disposition": "inline; filename=guest_qr.png"}
    )
