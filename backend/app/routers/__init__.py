# API Routers
from app.routers import houses, rooms, guests, reservations, payments, guest_requests

__all__ = ['houses', 'rooms', 'guests', 'reservations', 'payments', 'guest_requests']
