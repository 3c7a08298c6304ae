"""
预订服务 - 本体操作层
管理 Reservation 生命周期，并同步房间的 is_booked 状态

生命周期：不存在 -> 有效 -> 删除。退房只释放房间并记账，不删除预订。
创建和修改都会做冲突检测；删除和退房无条件释放房间，
即使同一房间还有其他未来的预订。
"""
from typing import List, Optional, Callable
from datetime import datetime
import logging
from sqlalchemy.orm import Session
from app.errors import Conflict, NotFound
from app.models.ontology import Reservation, Room, Guest
from app.models.schemas import ReservationPayload, PaymentResponse
from app.models.events import EventType, ReservationChangedData, RoomBookingChangedData
from app.services.availability_service import AvailabilityService, Interval
from app.services.payment_service import PaymentService, payment_message
from app.services.event_bus import event_bus, Event
from app.services.runtime import Clock, IdFactory, system_clock, uuid_id, booking_write_lock

logger = logging.getLogger(__name__)

ROOM_UNAVAILABLE_MESSAGE = "Room is not available for the selected dates"


class ReservationService:
    """预订服务"""

    def __init__(self, db: Session, clock: Clock = None, id_factory: IdFactory = None,
                 event_publisher: Callable[[Event], None] = None):
        self.db = db
        self._clock = clock or system_clock
        self._new_id = id_factory or uuid_id
        # 支持依赖注入事件发布器，便于测试
        self._publish_event = event_publisher or event_bus.publish
        self.availability = AvailabilityService(db)
        self.payments = PaymentService(
            db, clock=self._clock, id_factory=self._new_id,
            event_publisher=self._publish_event
        )

    # ============== 查询 ==============

    def get_reservation(self, reservation_id: str) -> Reservation:
        reservation = self.db.query(Reservation).filter(Reservation.id == reservation_id).first()
        if not reservation:
            raise NotFound("Reservation not found")
        return reservation

    def get_reservations(self, guest_id: Optional[str] = None,
                         room_id: Optional[str] = None) -> List[Reservation]:
        """按客人或房间筛选预订"""
        query = self.db.query(Reservation)
        if guest_id is not None:
            query = query.filter(Reservation.guest_id == guest_id)
        if room_id is not None:
            query = query.filter(Reservation.room_id == room_id)
        return query.order_by(Reservation.check_in_date).all()

    # ============== 内部辅助 ==============

    def _get_room(self, room_id: str) -> Room:
        room = self.db.query(Room).filter(Room.id == room_id).first()
        if not room:
            raise NotFound("Room not found")
        return room

    def _ensure_guest(self, guest_id: str) -> None:
        if not self.db.query(Guest).filter(Guest.id == guest_id).first():
            raise NotFound("Guest not found")

    def _ensure_room_free(self, room: Room, interval: Interval,
                          exclude_reservation_id: Optional[str] = None) -> None:
        conflicts = self.availability.find_conflicts(room.id, interval, exclude_reservation_id)
        if conflicts:
            logger.warning(
                f"Room {room.id} unavailable for [{interval.start}, {interval.end}): "
                f"conflicts with {[r.id for r in conflicts]}"
            )
            raise Conflict(ROOM_UNAVAILABLE_MESSAGE)

    def _set_room_booked(self, room: Room, is_booked: bool, reservation_id: str,
                         reason: str) -> Optional[Event]:
        """修改房间占用状态，状态有变化时返回待发布的事件"""
        if room.is_booked == is_booked:
            return None
        room.is_booked = is_booked
        return Event(
            event_type=EventType.ROOM_BOOKING_CHANGED.value,
            timestamp=datetime.now(),
            data=RoomBookingChangedData(
                room_id=room.id,
                room_number=room.room_number,
                is_booked=is_booked,
                reservation_id=reservation_id,
                reason=reason,
            ),
            source="reservation_service"
        )

    def _reservation_event(self, event_type: EventType, reservation: Reservation,
                           previous_room_id: Optional[str] = None) -> Event:
        return Event(
            event_type=event_type.value,
            timestamp=datetime.now(),
            data=ReservationChangedData(
                reservation_id=reservation.id,
                room_id=reservation.room_id,
                guest_id=reservation.guest_id,
                check_in_date=reservation.check_in_date,
                check_out_date=reservation.check_out_date,
                previous_room_id=previous_room_id,
            ),
            source="reservation_service"
        )

    def _publish_all(self, events: List[Optional[Event]]) -> None:
        for event in events:
            if event is not None:
                self._publish_event(event)

    # ============== 生命周期 ==============

    def create_reservation(self, data: ReservationPayload) -> Reservation:
        """
        创建预订
        1. 房间和客人必须存在
        2. 房间在该时间段内不能已有预订
        3. 写入预订并将房间标记为已预订
        """
        interval = Interval(data.check_in_date, data.check_out_date)

        with booking_write_lock:
            room = self._get_room(data.room_id)
            self._ensure_guest(data.guest_id)
            self._ensure_room_free(room, interval)

            reservation = Reservation(
                id=self._new_id(),
                house_id=room.house_id,
                room_id=room.id,
                guest_id=data.guest_id,
                check_in_date=interval.start,
                check_out_date=interval.end,
                created_date=self._clock(),
            )
            self.db.add(reservation)
            room_event = self._set_room_booked(room, True, reservation.id, "reservation created")

            self.db.commit()
            self.db.refresh(reservation)

        logger.info(f"Reservation {reservation.id} created for room {room.id}")
        self._publish_all([
            self._reservation_event(EventType.RESERVATION_CREATED, reservation),
            room_event,
        ])
        return reservation

    def update_reservation(self, reservation_id: str, data: ReservationPayload) -> Reservation:
        """
        修改预订的房间、客人和时间
        冲突检测排除预订自身；换房时原房间保持原状态
        """
        interval = Interval(data.check_in_date, data.check_out_date)

        with booking_write_lock:
            reservation = self.get_reservation(reservation_id)
            room = self._get_room(data.room_id)
            self._ensure_guest(data.guest_id)
            self._ensure_room_free(room, interval, exclude_reservation_id=reservation.id)

            previous_room_id = reservation.room_id
            reservation.house_id = room.house_id
            reservation.room_id = room.id
            reservation.guest_id = data.guest_id
            reservation.check_in_date = interval.start
            reservation.check_out_date = interval.end
            room_event = self._set_room_booked(room, True, reservation.id, "reservation updated")

            self.db.commit()
            self.db.refresh(reservation)

        if previous_room_id != reservation.room_id:
            logger.info(
                f"Reservation {reservation.id} moved from room {previous_room_id} "
                f"to {reservation.room_id}; previous room left unchanged"
            )
        self._publish_all([
            self._reservation_event(EventType.RESERVATION_UPDATED, reservation, previous_room_id),
            room_event,
        ])
        return reservation

    def delete_reservation(self, reservation_id: str) -> str:
        """删除预订并释放房间，付款记录保留"""
        with booking_write_lock:
            reservation = self.get_reservation(reservation_id)
            deleted_event = self._reservation_event(EventType.RESERVATION_DELETED, reservation)

            room = self.db.query(Room).filter(Room.id == reservation.room_id).first()
            room_event = None
            if room:
                room_event = self._set_room_booked(room, False, reservation_id, "reservation deleted")

            self.db.delete(reservation)
            self.db.commit()

        logger.info(f"Reservation {reservation_id} deleted")
        self._publish_all([deleted_event, room_event])
        return f"Reservation with ID: {reservation_id} deleted successfully"

    def check_out_and_pay(self, reservation_id: str, amount: str) -> PaymentResponse:
        """
        退房并付款
        释放房间，记一笔已支付流水；预订本身保留
        """
        with booking_write_lock:
            reservation = self.get_reservation(reservation_id)
            payment = self.payments.record_payment(reservation_id, amount)

            room = self.db.query(Room).filter(Room.id == reservation.room_id).first()
            room_event = None
            if room:
                room_event = self._set_room_booked(room, False, reservation_id, "checked out")

            self.db.commit()

        logger.info(f"Reservation {reservation_id} checked out, payment {payment.id}")
        self._publish_all([room_event])
        self.payments.publish_payment_received(payment, checked_out=True)
        return PaymentResponse(msg=payment_message(reservation_id), amount=float(payment.amount))
