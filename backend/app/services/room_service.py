"""
房间服务 - 本体操作层
管理 Room 对象及空闲房间查询
所有筛选都是对房间表的全量扫描 + 条件过滤
"""
from typing import List, Callable, Optional
import logging
from sqlalchemy.orm import Session
from app.errors import BookingError, NotFound
from app.models.ontology import Room
from app.models.schemas import RoomPayload, RoomUpdate
from app.services.availability_service import AvailabilityService, Interval
from app.services.house_service import HouseService
from app.services.runtime import Clock, IdFactory, system_clock, uuid_id, booking_write_lock

logger = logging.getLogger(__name__)


class RoomService:
    """房间服务"""

    def __init__(self, db: Session, clock: Clock = None, id_factory: IdFactory = None):
        self.db = db
        self._clock = clock or system_clock
        self._new_id = id_factory or uuid_id
        self.houses = HouseService(db, clock=self._clock, id_factory=self._new_id)

    # ============== 基本操作 ==============

    def get_room(self, room_id: str) -> Room:
        """获取单个房间"""
        room = self.db.query(Room).filter(Room.id == room_id).first()
        if not room:
            raise NotFound("Room not found")
        return room

    def get_rooms(self, house_id: Optional[str] = None) -> List[Room]:
        """获取房间列表"""
        query = self.db.query(Room)
        if house_id is not None:
            query = query.filter(Room.house_id == house_id)
        return query.order_by(Room.created_date).all()

    def add_room(self, data: RoomPayload) -> Room:
        """新增房间，初始为空闲"""
        self.houses.get_house(data.house_id)

        room = Room(
            id=self._new_id(),
            house_id=data.house_id,
            room_number=data.room_number,
            type=data.type,
            is_booked=False,
            price=data.price,
            created_date=self._clock(),
            updated_at=None,
        )
        self.db.add(room)
        self.db.commit()
        self.db.refresh(room)
        logger.info(f"Room {room.room_number} ({room.id}) added to house {room.house_id}")
        return room

    def update_room(self, room_id: str, data: RoomUpdate, caller: str) -> Room:
        """更新房间信息（仅房东），不改变 is_booked"""
        with booking_write_lock:
            room = self.get_room(room_id)
            self.houses.ensure_owner(room.house_id, caller)

            room.room_number = data.room_number
            room.type = data.type
            room.price = data.price
            room.updated_at = self._clock()

            self.db.commit()
            self.db.refresh(room)
        return room

    def delete_room(self, room_id: str, caller: str) -> str:
        """删除房间（仅房东），其预订保留"""
        with booking_write_lock:
            room = self.get_room(room_id)
            self.houses.ensure_owner(room.house_id, caller)
            self.db.delete(room)
            self.db.commit()

        logger.info(f"Room {room_id} deleted by {caller}")
        return f"Room with ID: {room_id} deleted successfully"

    # ============== 空闲房间查询 ==============

    def _search_available(self, house_id: str, predicate: Callable[[Room], bool],
                          empty_message: str) -> List[Room]:
        rooms = [
            room for room in self.get_rooms(house_id)
            if not room.is_booked and predicate(room)
        ]
        if not rooms:
            raise NotFound(empty_message)
        return rooms

    def get_available_rooms(self, house_id: str) -> List[Room]:
        """房屋内当前空闲的房间"""
        return self._search_available(
            house_id, lambda room: True,
            "No available rooms in this house currently"
        )

    def search_available_rooms_by_date_range(self, house_id: str,
                                             start_date: int, end_date: int) -> List[Room]:
        """按房间创建时间落在 [start_date, end_date] 内筛选空闲房间"""
        return self._search_available(
            house_id,
            lambda room: start_date <= room.created_date <= end_date,
            "No available rooms in this house for the specified date range"
        )

    def search_available_rooms_by_type(self, house_id: str, room_type: str) -> List[Room]:
        """按房型筛选空闲房间"""
        return self._search_available(
            house_id,
            lambda room: room.type == room_type,
            "No available rooms in this house with the specified type"
        )

    def search_available_rooms_by_price_range(self, house_id: str,
                                              min_price: str, max_price: str) -> List[Room]:
        """按价格区间（含两端）筛选空闲房间"""
        try:
            low, high = float(min_price), float(max_price)
        except (TypeError, ValueError) as e:
            raise BookingError(f"Invalid price range: {min_price} - {max_price}") from e

        return self._search_available(
            house_id,
            lambda room: low <= float(room.price) <= high,
            "No available rooms in this house within the specified price range"
        )

    def check_room_availability(self, room_id: str, candidate: Interval) -> bool:
        """房间能否预订候选区间（只读）"""
        room = self.get_room(room_id)
        return AvailabilityService(self.db).check_room_availability(room.id, candidate)
