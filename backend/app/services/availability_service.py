"""
可用性服务 - 预订冲突检测
判断房间在候选时间段内是否已被其他预订占用

时间段均为半开区间 [start, end)，首尾相接的两个区间不冲突。
"""
from dataclasses import dataclass
from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.ontology import Reservation


@dataclass(frozen=True)
class Interval:
    """半开时间区间，单位为纳秒"""
    start: int
    end: int

    @classmethod
    def of(cls, reservation: Reservation) -> "Interval":
        return cls(reservation.check_in_date, reservation.check_out_date)


def overlaps(candidate: Interval, existing: Interval) -> bool:
    """
    两个半开区间是否重叠

    三个条件任一成立即重叠：
    1. 候选区间的开始落在已有区间内
    2. 候选区间的结束落在已有区间内
    3. 候选区间完全覆盖已有区间
    """
    a, b = candidate, existing
    return (
        (a.start >= b.start and a.start < b.end)
        or (a.end > b.start and a.end <= b.end)
        or (a.start <= b.start and a.end >= b.end)
    )


class AvailabilityService:
    """可用性服务，只读取预订表"""

    def __init__(self, db: Session):
        self.db = db

    def find_conflicts(self, room_id: str, candidate: Interval,
                       exclude_reservation_id: Optional[str] = None) -> List[Reservation]:
        """查找与候选区间重叠的预订，可排除正在修改的那条预订"""
        reservations = self.db.query(Reservation).filter(Reservation.room_id == room_id).all()
        return [
            r for r in reservations
            if r.id != exclude_reservation_id and overlaps(candidate, Interval.of(r))
        ]

    def is_room_free(self, room_id: str, candidate: Interval,
                     exclude_reservation_id: Optional[str] = None) -> bool:
        """房间在候选区间内是否空闲"""
        return not self.find_conflicts(room_id, candidate, exclude_reservation_id)

    def check_room_availability(self, room_id: str, candidate: Interval) -> bool:
        """只读探测：房间此刻是否可预订该区间"""
        return self.is_room_free(room_id, candidate)
