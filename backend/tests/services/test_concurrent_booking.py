"""
并发预订测试
多个线程各用自己的会话同时预订同一房间的重叠时间段，只能成功一个
"""
import threading

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.database import Base
from app.errors import Conflict
from app.models.ontology import Reservation, Room
from app.models.schemas import GuestPayload, ReservationPayload, RoomPayload
from app.services.guest_service import GuestService
from app.services.house_service import HouseService
from app.services.reservation_service import ReservationService
from app.services.room_service import RoomService

DAY = 24 * 60 * 60 * 10 ** 9
HOUR = 60 * 60 * 10 ** 9
WORKERS = 20


@pytest.fixture
def file_session_factory(tmp_path):
    """文件数据库，每个线程单独建连接"""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'booking.db'}",
        connect_args={"check_same_thread": False, "timeout": 30}
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def room_and_guest(file_session_factory):
    session = file_session_factory()
    try:
        house = HouseService(session).init_house("海边小屋", None, owner="owner-principal")
        room = RoomService(session).add_room(RoomPayload(house_id=house.id, room_number="101", price="100"))
        guest = GuestService(session).add_guest(GuestPayload(name="张三"))
        return room.id, guest.id
    finally:
        session.close()


def test_concurrent_overlapping_creates_book_once(file_session_factory, room_and_guest):
    room_id, guest_id = room_and_guest
    barrier = threading.Barrier(WORKERS)
    conflicts = []
    errors = []

    def worker(index):
        session = file_session_factory()
        svc = ReservationService(session, event_publisher=lambda e: None)
        payload = ReservationPayload(
            room_id=room_id,
            guest_id=guest_id,
            check_in_date=index * HOUR,
            check_out_date=index * HOUR + 3 * DAY,
        )
        try:
            barrier.wait()
            svc.create_reservation(payload)
        except Conflict:
            conflicts.append(index)
        except Exception as e:
            errors.append(e)
        finally:
            session.close()

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(WORKERS)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(conflicts) == WORKERS - 1

    session = file_session_factory()
    try:
        assert session.query(Reservation).count() == 1
        assert session.query(Room).one().is_booked is True
    finally:
        session.close()
