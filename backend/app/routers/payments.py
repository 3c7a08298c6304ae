"""
付款路由
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from app.database import get_db
from app.errors import BookingError, NotFound
from app.models.schemas import PaymentPayload, PaymentResponse, PaymentRecordResponse
from app.services.payment_service import PaymentService
from app.security.auth import get_current_principal

router = APIRouter(prefix="/payments", tags=["付款管理"])


@router.post("", response_model=PaymentResponse)
def make_payment(
    data: PaymentPayload,
    db: Session = Depends(get_db),
    principal: str = Depends(get_current_principal)
):
    """为预订记一笔付款"""
    service = PaymentService(db)
    try:
        return service.make_payment(data.reservation_id, data.amount)
    except NotFound as e:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=PaymentResponse(msg=str(e), amount=0).model_dump()
        )
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("", response_model=List[PaymentRecordResponse])
def get_payment_history(reservation_id: str, db: Session = Depends(get_db)):
    """预订的付款记录"""
    try:
        return PaymentService(db).get_payment_history(reservation_id)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/{payment_id}", response_model=PaymentRecordResponse)
def get_payment(payment_id: str, db: Session = Depends(get_db)):
    """获取付款记录"""
    try:
        return PaymentService(db).get_payment(payment_id)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
