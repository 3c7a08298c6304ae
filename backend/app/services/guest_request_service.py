"""
客人请求服务
客人提交的请求记录，新请求为 Pending，状态可被更新为任意文本
"""
from typing import List, Callable
from datetime import datetime
from sqlalchemy.orm import Session
from app.errors import NotFound
from app.models.ontology import Guest, GuestRequest, GuestRequestStatus
from app.models.events import EventType, GuestRequestSubmittedData
from app.services.event_bus import event_bus, Event
from app.services.runtime import Clock, IdFactory, system_clock, uuid_id


class GuestRequestService:
    """客人请求服务"""

    def __init__(self, db: Session, clock: Clock = None, id_factory: IdFactory = None,
                 event_publisher: Callable[[Event], None] = None):
        self.db = db
        self._clock = clock or system_clock
        self._new_id = id_factory or uuid_id
        self._publish_event = event_publisher or event_bus.publish

    def submit_guest_request(self, guest_id: str, details: str) -> GuestRequest:
        if not self.db.query(Guest).filter(Guest.id == guest_id).first():
            raise NotFound("Guest not found")

        request = GuestRequest(
            id=self._new_id(),
            guest_id=guest_id,
            details=details,
            status=GuestRequestStatus.PENDING.value,
            created_date=self._clock(),
        )
        self.db.add(request)
        self.db.commit()
        self.db.refresh(request)

        self._publish_event(Event(
            event_type=EventType.GUEST_REQUEST_SUBMITTED.value,
            timestamp=datetime.now(),
            data=GuestRequestSubmittedData(
                request_id=request.id,
                guest_id=guest_id,
                details=details,
            ),
            source="guest_request_service"
        ))
        return request

    def get_guest_requests_by_guest_id(self, guest_id: str) -> List[GuestRequest]:
        requests = self.db.query(GuestRequest).filter(
            GuestRequest.guest_id == guest_id
        ).order_by(GuestRequest.created_date).all()
        if not requests:
            raise NotFound("No requests found for this guest")
        return requests

    def get_guest_request(self, request_id: str) -> GuestRequest:
        request = self.db.query(GuestRequest).filter(GuestRequest.id == request_id).first()
        if not request:
            raise NotFound("Guest request not found")
        return request

    def update_guest_request_status(self, request_id: str, status: str) -> GuestRequest:
        request = self.get_guest_request(request_id)
        request.status = status
        self.db.commit()
        self.db.refresh(request)
        return request
