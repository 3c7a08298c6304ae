"""
Tests for app/services/room_service.py
Covers: add_room, get_room, update_room, delete_room (owner-only),
        get_available_rooms and the search_available_rooms_by_* filters,
        check_room_availability
"""
import pytest

from app.errors import BookingError, NotFound, Unauthorized
from app.models.ontology import Reservation, Room
from app.models.schemas import RoomPayload, RoomUpdate
from app.services.availability_service import Interval
from app.services.room_service import RoomService


OWNER = "owner-principal"
DAY = 24 * 60 * 60 * 10 ** 9


def _book(db, room, reservation_id="r1", start=0, end=DAY):
    room.is_booked = True
    db.add(Reservation(id=reservation_id, room_id=room.id, guest_id="g1",
                       check_in_date=start, check_out_date=end, created_date=0))
    db.commit()


class TestRoomCrud:

    def test_add_room(self, db_session, sample_house, clock):
        svc = RoomService(db_session, clock=clock)
        room = svc.add_room(RoomPayload(house_id=sample_house.id, room_number="201",
                                        type="suite", price="300.50"))
        assert room.id
        assert room.is_booked is False
        assert room.price == "300.50"
        assert room.updated_at is None
        assert svc.get_room(room.id).room_number == "201"

    def test_add_room_unknown_house(self, db_session):
        svc = RoomService(db_session)
        with pytest.raises(NotFound, match="House not found"):
            svc.add_room(RoomPayload(house_id="missing", room_number="1", price="10"))
        assert db_session.query(Room).count() == 0

    def test_get_room_not_found(self, db_session):
        with pytest.raises(NotFound, match="Room not found"):
            RoomService(db_session).get_room("missing")

    def test_update_room_by_owner(self, db_session, sample_room, clock):
        svc = RoomService(db_session, clock=clock)
        room = svc.update_room(sample_room.id, RoomUpdate(room_number="101A", type="single", price="80"), OWNER)
        assert room.room_number == "101A"
        assert room.type == "single"
        assert room.price == "80"
        assert room.updated_at is not None

    def test_update_room_keeps_booked_flag(self, db_session, sample_room):
        _book(db_session, sample_room)
        room = RoomService(db_session).update_room(
            sample_room.id, RoomUpdate(room_number="101", price="90"), OWNER)
        assert room.is_booked is True

    def test_update_room_by_stranger_rejected(self, db_session, sample_room):
        with pytest.raises(Unauthorized):
            RoomService(db_session).update_room(
                sample_room.id, RoomUpdate(room_number="X", price="1"), "someone-else")
        db_session.expire_all()
        assert db_session.query(Room).one().room_number == "101"

    def test_delete_room(self, db_session, sample_room):
        message = RoomService(db_session).delete_room(sample_room.id, OWNER)
        assert message == f"Room with ID: {sample_room.id} deleted successfully"
        assert db_session.query(Room).count() == 0

    def test_delete_room_keeps_reservations(self, db_session, sample_room):
        _book(db_session, sample_room)
        RoomService(db_session).delete_room(sample_room.id, OWNER)
        assert db_session.query(Reservation).count() == 1

    def test_delete_room_by_stranger_rejected(self, db_session, sample_room):
        with pytest.raises(Unauthorized):
            RoomService(db_session).delete_room(sample_room.id, "someone-else")
        assert db_session.query(Room).count() == 1

    def test_delete_unknown_room(self, db_session):
        with pytest.raises(NotFound):
            RoomService(db_session).delete_room("missing", OWNER)


class TestAvailableRooms:

    def test_available_rooms_excludes_booked(self, db_session, sample_house, make_room):
        free = make_room("101")
        booked = make_room("102")
        _book(db_session, booked)

        rooms = RoomService(db_session).get_available_rooms(sample_house.id)
        assert [r.id for r in rooms] == [free.id]

    def test_available_rooms_none(self, db_session, sample_house, sample_room):
        _book(db_session, sample_room)
        with pytest.raises(NotFound, match="No available rooms in this house currently"):
            RoomService(db_session).get_available_rooms(sample_house.id)

    def test_available_rooms_other_house(self, db_session, sample_room):
        with pytest.raises(NotFound):
            RoomService(db_session).get_available_rooms("other-house")

    def test_search_by_price_range(self, db_session, sample_house, make_room):
        make_room("101", price="80")
        expensive = make_room("102", price="120")

        rooms = RoomService(db_session).search_available_rooms_by_price_range(sample_house.id, "90", "130")
        assert [r.id for r in rooms] == [expensive.id]

    def test_search_by_price_range_inclusive(self, db_session, sample_house, make_room):
        make_room("101", price="80")
        make_room("102", price="120")
        rooms = RoomService(db_session).search_available_rooms_by_price_range(sample_house.id, "80", "120")
        assert len(rooms) == 2

    def test_search_by_price_range_empty(self, db_session, sample_house, make_room):
        make_room("101", price="80")
        with pytest.raises(NotFound, match="within the specified price range"):
            RoomService(db_session).search_available_rooms_by_price_range(sample_house.id, "200", "300")

    def test_search_by_price_range_invalid(self, db_session, sample_house, sample_room):
        with pytest.raises(BookingError, match="Invalid price range"):
            RoomService(db_session).search_available_rooms_by_price_range(sample_house.id, "abc", "10")

    def test_search_by_type(self, db_session, sample_house, make_room):
        make_room("101", room_type="double")
        suite = make_room("102", room_type="suite")
        rooms = RoomService(db_session).search_available_rooms_by_type(sample_house.id, "suite")
        assert [r.id for r in rooms] == [suite.id]

    def test_search_by_type_empty(self, db_session, sample_house, make_room):
        make_room("101", room_type="double")
        with pytest.raises(NotFound, match="with the specified type"):
            RoomService(db_session).search_available_rooms_by_type(sample_house.id, "suite")

    def test_search_by_date_range_uses_creation_time(self, db_session, sample_house, make_room):
        first = make_room("101")
        second = make_room("102")
        svc = RoomService(db_session)

        rooms = svc.search_available_rooms_by_date_range(
            sample_house.id, first.created_date, first.created_date)
        assert [r.id for r in rooms] == [first.id]

        rooms = svc.search_available_rooms_by_date_range(
            sample_house.id, first.created_date, second.created_date)
        assert len(rooms) == 2

    def test_search_by_date_range_empty(self, db_session, sample_house, sample_room):
        with pytest.raises(NotFound, match="for the specified date range"):
            RoomService(db_session).search_available_rooms_by_date_range(sample_house.id, 0, 1)


class TestCheckRoomAvailability:

    def test_probe(self, db_session, sample_room):
        _book(db_session, sample_room, start=0, end=2 * DAY)
        svc = RoomService(db_session)
        assert svc.check_room_availability(sample_room.id, Interval(DAY, 3 * DAY)) is False
        assert svc.check_room_availability(sample_room.id, Interval(2 * DAY, 3 * DAY)) is True

    def test_probe_unknown_room(self, db_session):
        with pytest.raises(NotFound):
            RoomService(db_session).check_room_availability("missing", Interval(0, DAY))
