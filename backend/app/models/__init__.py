# Ontology Models
from app.models.ontology import (
    House, Room, Guest, Reservation, Payment, GuestRequest
)

__all__ = [
    'House', 'Room', 'Guest', 'Reservation', 'Payment', 'GuestRequest'
]
