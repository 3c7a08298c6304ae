"""
客人请求路由
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.errors import BookingError
from app.models.schemas import (
    GuestRequestPayload, GuestRequestStatusUpdate, GuestRequestResponse, IdResponse
)
from app.services.guest_request_service import GuestRequestService
from app.security.auth import get_current_principal

router = APIRouter(prefix="/guest-requests", tags=["客人请求"])


@router.post("", response_model=IdResponse)
def submit_guest_request(
    data: GuestRequestPayload,
    db: Session = Depends(get_db),
    principal: str = Depends(get_current_principal)
):
    """提交客人请求"""
    try:
        request = GuestRequestService(db).submit_guest_request(data.guest_id, data.details)
        return IdResponse(id=request.id)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("", response_model=List[GuestRequestResponse])
def get_guest_requests_by_guest_id(guest_id: str, db: Session = Depends(get_db)):
    """客人的请求列表"""
    try:
        return GuestRequestService(db).get_guest_requests_by_guest_id(guest_id)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/{request_id}/status", response_model=IdResponse)
def update_guest_request_status(
    request_id: str,
    data: GuestRequestStatusUpdate,
    db: Session = Depends(get_db),
    principal: str = Depends(get_current_principal)
):
    """更新请求状态"""
    try:
        request = GuestRequestService(db).update_guest_request_status(request_id, data.status)
        return IdResponse(id=request.id)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
