"""
房屋管理路由
包含房屋下空闲房间的查询
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.errors import BookingError
from app.models.schemas import HouseInit, HouseUpdate, HouseResponse, RoomResponse
from app.services.house_service import HouseService
from app.services.room_service import RoomService
from app.security.auth import get_current_principal

router = APIRouter(prefix="/houses", tags=["房屋管理"])


@router.post("", response_model=HouseResponse)
def init_house(
    data: HouseInit,
    db: Session = Depends(get_db),
    principal: str = Depends(get_current_principal)
):
    """初始化房屋（只能一次）"""
    service = HouseService(db)
    try:
        return service.init_house(data.name, data.address, owner=principal)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/current", response_model=HouseResponse)
def get_current_house(db: Session = Depends(get_db)):
    """获取本部署的房屋"""
    try:
        return HouseService(db).get_current_house()
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/{house_id}", response_model=HouseResponse)
def get_house(house_id: str, db: Session = Depends(get_db)):
    """获取房屋"""
    try:
        return HouseService(db).get_house(house_id)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/{house_id}", response_model=HouseResponse)
def update_house(
    house_id: str,
    data: HouseUpdate,
    db: Session = Depends(get_db),
    principal: str = Depends(get_current_principal)
):
    """更新房屋信息（仅房东）"""
    service = HouseService(db)
    try:
        return service.update_house(house_id, data, principal)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


# ============== 空闲房间 ==============

@router.get("/{house_id}/available-rooms", response_model=List[RoomResponse])
def get_available_rooms(house_id: str, db: Session = Depends(get_db)):
    """房屋内当前空闲的房间"""
    try:
        return RoomService(db).get_available_rooms(house_id)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/{house_id}/available-rooms/by-date-range", response_model=List[RoomResponse])
def search_available_rooms_by_date_range(
    house_id: str,
    start_date: int,
    end_date: int,
    db: Session = Depends(get_db)
):
    """按创建时间区间筛选空闲房间"""
    try:
        return RoomService(db).search_available_rooms_by_date_range(house_id, start_date, end_date)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/{house_id}/available-rooms/by-type", response_model=List[RoomResponse])
def search_available_rooms_by_type(
    house_id: str,
    room_type: str,
    db: Session = Depends(get_db)
):
    """按房型筛选空闲房间"""
    try:
        return RoomService(db).search_available_rooms_by_type(house_id, room_type)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/{house_id}/available-rooms/by-price-range", response_model=List[RoomResponse])
def search_available_rooms_by_price_range(
    house_id: str,
    min_price: str,
    max_price: str,
    db: Session = Depends(get_db)
):
    """按价格区间筛选空闲房间"""
    try:
        return RoomService(db).search_available_rooms_by_price_range(house_id, min_price, max_price)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
