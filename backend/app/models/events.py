"""
领域事件定义 (Domain Events)
预订生命周期、房间占用状态、付款和客人请求相关事件
"""
from enum import Enum
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional, Dict, Any


class EventType(str, Enum):
    """事件类型枚举"""
    # 房间相关
    ROOM_BOOKING_CHANGED = "room.booking_changed"

    # 预订相关
    RESERVATION_CREATED = "reservation.created"
    RESERVATION_UPDATED = "reservation.updated"
    RESERVATION_DELETED = "reservation.deleted"

    # 付款相关
    PAYMENT_RECEIVED = "payment.received"

    # 客人请求
    GUEST_REQUEST_SUBMITTED = "guest_request.submitted"


@dataclass
class BaseEventData:
    """事件数据基类"""
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        result = asdict(self)
        for key, value in result.items():
            if isinstance(value, datetime):
                result[key] = value.isoformat()
        return result


@dataclass
class RoomBookingChangedData(BaseEventData):
    """房间 is_booked 变更"""
    room_id: str = ""
    room_number: str = ""
    is_booked: bool = False
    reservation_id: Optional[str] = None
    reason: str = ""


@dataclass
class ReservationChangedData(BaseEventData):
    """预订创建 / 更新 / 删除"""
    reservation_id: str = ""
    room_id: str = ""
    guest_id: str = ""
    check_in_date: int = 0
    check_out_date: int = 0
    previous_room_id: Optional[str] = None


@dataclass
class PaymentReceivedData(BaseEventData):
    """付款入账"""
    payment_id: str = ""
    reservation_id: str = ""
    amount: str = "0"
    checked_out: bool = False


@dataclass
class GuestRequestSubmittedData(BaseEventData):
    """客人提交请求"""
    request_id: str = ""
    guest_id: str = ""
    details: str = ""
