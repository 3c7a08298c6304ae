"""
事件处理器
订阅领域事件，记录房间占用状态和付款流水的变更日志
"""
import logging

from app.services.event_bus import event_bus, Event, EventBus
from app.models.events import EventType

logger = logging.getLogger(__name__)


class EventHandlers:
    """事件处理器集合"""

    def __init__(self, bus: EventBus = None):
        self._bus = bus or event_bus
        self._registered = False

    def handle_room_booking_changed(self, event: Event) -> None:
        """房间占用状态变更"""
        data = event.data
        logger.info(
            f"Room {data.room_number} ({data.room_id}) is_booked={data.is_booked} "
            f"reservation={data.reservation_id} reason={data.reason}"
        )

    def handle_payment_received(self, event: Event) -> None:
        """付款入账"""
        data = event.data
        logger.info(
            f"Payment {data.payment_id} of {data.amount} recorded for reservation "
            f"{data.reservation_id} (checkout={data.checked_out})"
        )

    def register_handlers(self) -> None:
        """注册处理器，重复调用无副作用"""
        if self._registered:
            return
        self._bus.subscribe(EventType.ROOM_BOOKING_CHANGED.value, self.handle_room_booking_changed)
        self._bus.subscribe(EventType.PAYMENT_RECEIVED.value, self.handle_payment_received)
        self._registered = True

    def unregister_handlers(self) -> None:
        """取消注册"""
        if not self._registered:
            return
        self._bus.unsubscribe(EventType.ROOM_BOOKING_CHANGED.value, self.handle_room_booking_changed)
        self._bus.unsubscribe(EventType.PAYMENT_RECEIVED.value, self.handle_payment_received)
        self._registered = False


event_handlers = EventHandlers()


def register_event_handlers():
    """注册所有事件处理器（应用启动时调用）"""
    event_handlers.register_handlers()
