# Business Services
from app.services.house_service import HouseService
from app.services.room_service import RoomService
from app.services.guest_service import GuestService
from app.services.availability_service import AvailabilityService, Interval, overlaps
from app.services.reservation_service import ReservationService
from app.services.payment_service import PaymentService
from app.services.guest_request_service import GuestRequestService

__all__ = [
    'HouseService', 'RoomService', 'GuestService',
    'AvailabilityService', 'Interval', 'overlaps',
    'ReservationService', 'PaymentService', 'GuestRequestService'
]
