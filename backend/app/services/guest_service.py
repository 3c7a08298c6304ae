"""
客人服务 - 本体操作层
"""
from typing import List
from sqlalchemy.orm import Session
from app.errors import NotFound
from app.models.ontology import Guest
from app.models.schemas import GuestPayload
from app.services.runtime import Clock, IdFactory, system_clock, uuid_id


class GuestService:
    """客人服务"""

    def __init__(self, db: Session, clock: Clock = None, id_factory: IdFactory = None):
        self.db = db
        self._clock = clock or system_clock
        self._new_id = id_factory or uuid_id

    def get_guests(self, limit: int = 100) -> List[Guest]:
        return self.db.query(Guest).order_by(Guest.created_date).limit(limit).all()

    def get_guest(self, guest_id: str) -> Guest:
        guest = self.db.query(Guest).filter(Guest.id == guest_id).first()
        if not guest:
            raise NotFound("Guest not found")
        return guest

    def add_guest(self, data: GuestPayload) -> Guest:
        guest = Guest(
            id=self._new_id(),
            name=data.name,
            email=data.email,
            phone=data.phone,
            created_date=self._clock(),
        )
        self.db.add(guest)
        self.db.commit()
        self.db.refresh(guest)
        return guest

    def update_guest(self, guest_id: str, data: GuestPayload) -> Guest:
        """覆盖姓名、邮箱、电话"""
        guest = self.get_guest(guest_id)
        guest.name = data.name
        guest.email = data.email
        guest.phone = data.phone
        self.db.commit()
        self.db.refresh(guest)
        return guest

    def delete_guest(self, guest_id: str) -> str:
        """删除客人，其预订和请求保留"""
        guest = self.get_guest(guest_id)
        self.db.delete(guest)
        self.db.commit()
        return f"Guest with ID: {guest_id} deleted successfully"
