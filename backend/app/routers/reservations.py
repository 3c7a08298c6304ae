"""
预订管理路由
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from app.database import get_db
from app.errors import BookingError, NotFound
from app.models.schemas import (
    ReservationPayload, ReservationResponse, ReservationMessage,
    CheckOutRequest, PaymentResponse, MessageResponse
)
from app.services.reservation_service import ReservationService
from app.security.auth import get_current_principal

router = APIRouter(prefix="/reservations", tags=["预订管理"])


@router.get("", response_model=List[ReservationResponse])
def list_reservations(
    guest_id: Optional[str] = None,
    room_id: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """获取预订列表，可按客人或房间筛选"""
    return ReservationService(db).get_reservations(guest_id=guest_id, room_id=room_id)


@router.get("/{reservation_id}", response_model=ReservationResponse)
def get_reservation(reservation_id: str, db: Session = Depends(get_db)):
    """获取预订详情"""
    try:
        return ReservationService(db).get_reservation(reservation_id)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post("", response_model=ReservationMessage)
def make_reservation(
    data: ReservationPayload,
    db: Session = Depends(get_db),
    principal: str = Depends(get_current_principal)
):
    """创建预订"""
    service = ReservationService(db)
    try:
        reservation = service.create_reservation(data)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return ReservationMessage(
        message=f"Reservation ID: {reservation.id} made successfully",
        reservation_id=reservation.id
    )


@router.put("/{reservation_id}", response_model=ReservationResponse)
def update_reservation(
    reservation_id: str,
    data: ReservationPayload,
    db: Session = Depends(get_db),
    principal: str = Depends(get_current_principal)
):
    """修改预订"""
    service = ReservationService(db)
    try:
        return service.update_reservation(reservation_id, data)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/{reservation_id}", response_model=MessageResponse)
def delete_reservation(
    reservation_id: str,
    db: Session = Depends(get_db),
    principal: str = Depends(get_current_principal)
):
    """删除预订"""
    service = ReservationService(db)
    try:
        return MessageResponse(message=service.delete_reservation(reservation_id))
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post("/{reservation_id}/checkout", response_model=PaymentResponse)
def check_out_and_pay(
    reservation_id: str,
    data: CheckOutRequest,
    db: Session = Depends(get_db),
    principal: str = Depends(get_current_principal)
):
    """退房并付款"""
    service = ReservationService(db)
    try:
        return service.check_out_and_pay(reservation_id, data.amount)
    except NotFound as e:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=PaymentResponse(msg=str(e), amount=0).model_dump()
        )
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
