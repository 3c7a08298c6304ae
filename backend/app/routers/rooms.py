"""
房间管理路由
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from app.database import get_db
from app.errors import BookingError
from app.models.schemas import (
    RoomPayload, RoomUpdate, RoomResponse, RoomAvailabilityResponse,
    IdResponse, MessageResponse
)
from app.services.availability_service import Interval
from app.services.room_service import RoomService
from app.security.auth import get_current_principal

router = APIRouter(prefix="/rooms", tags=["房间管理"])


@router.get("", response_model=List[RoomResponse])
def list_rooms(house_id: Optional[str] = None, db: Session = Depends(get_db)):
    """获取房间列表"""
    return RoomService(db).get_rooms(house_id)


@router.post("", response_model=IdResponse)
def add_room(
    data: RoomPayload,
    db: Session = Depends(get_db),
    principal: str = Depends(get_current_principal)
):
    """新增房间"""
    service = RoomService(db)
    try:
        room = service.add_room(data)
        return IdResponse(id=room.id)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(room_id: str, db: Session = Depends(get_db)):
    """获取房间详情"""
    try:
        return RoomService(db).get_room(room_id)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/{room_id}", response_model=IdResponse)
def update_room(
    room_id: str,
    data: RoomUpdate,
    db: Session = Depends(get_db),
    principal: str = Depends(get_current_principal)
):
    """更新房间（仅房东）"""
    service = RoomService(db)
    try:
        room = service.update_room(room_id, data, principal)
        return IdResponse(id=room.id)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/{room_id}", response_model=MessageResponse)
def delete_room(
    room_id: str,
    db: Session = Depends(get_db),
    principal: str = Depends(get_current_principal)
):
    """删除房间（仅房东）"""
    service = RoomService(db)
    try:
        return MessageResponse(message=service.delete_room(room_id, principal))
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/{room_id}/availability", response_model=RoomAvailabilityResponse)
def check_room_availability(
    room_id: str,
    check_in_date: int = Query(..., ge=0),
    check_out_date: int = Query(..., ge=0),
    db: Session = Depends(get_db)
):
    """查询房间能否预订指定时间段"""
    service = RoomService(db)
    try:
        available = service.check_room_availability(room_id, Interval(check_in_date, check_out_date))
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return RoomAvailabilityResponse(
        room_id=room_id,
        check_in_date=check_in_date,
        check_out_date=check_out_date,
        available=available
    )
