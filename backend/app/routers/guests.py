"""
客人管理路由
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.errors import BookingError
from app.models.schemas import GuestPayload, GuestResponse, IdResponse, MessageResponse
from app.services.guest_service import GuestService
from app.security.auth import get_current_principal

router = APIRouter(prefix="/guests", tags=["客人管理"])


@router.get("", response_model=List[GuestResponse])
def list_guests(limit: int = 100, db: Session = Depends(get_db)):
    """获取客人列表"""
    return GuestService(db).get_guests(limit=limit)


@router.post("", response_model=IdResponse)
def add_guest(
    data: GuestPayload,
    db: Session = Depends(get_db),
    principal: str = Depends(get_current_principal)
):
    """新增客人"""
    guest = GuestService(db).add_guest(data)
    return IdResponse(id=guest.id)


@router.get("/{guest_id}", response_model=GuestResponse)
def get_guest(guest_id: str, db: Session = Depends(get_db)):
    """获取客人详情"""
    try:
        return GuestService(db).get_guest(guest_id)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/{guest_id}", response_model=IdResponse)
def update_guest(
    guest_id: str,
    data: GuestPayload,
    db: Session = Depends(get_db),
    principal: str = Depends(get_current_principal)
):
    """更新客人信息"""
    try:
        guest = GuestService(db).update_guest(guest_id, data)
        return IdResponse(id=guest.id)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/{guest_id}", response_model=MessageResponse)
def delete_guest(
    guest_id: str,
    db: Session = Depends(get_db),
    principal: str = Depends(get_current_principal)
):
    """删除客人"""
    try:
        return MessageResponse(message=GuestService(db).delete_guest(guest_id))
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
