"""
付款服务 - 本体操作层
付款只是账本记录，不对接支付网关
"""
from typing import List, Callable
from datetime import datetime
import logging
from sqlalchemy.orm import Session
from app.errors import BookingError, NotFound
from app.models.ontology import Payment, PaymentStatus, Reservation
from app.models.schemas import PaymentResponse, parse_decimal_text
from app.models.events import EventType, PaymentReceivedData
from app.services.event_bus import event_bus, Event
from app.services.runtime import Clock, IdFactory, system_clock, uuid_id

logger = logging.getLogger(__name__)


def payment_message(reservation_id: str) -> str:
    return f"Payment processed successfully for Reservation ID: {reservation_id}"


class PaymentService:
    """付款服务"""

    def __init__(self, db: Session, clock: Clock = None, id_factory: IdFactory = None,
                 event_publisher: Callable[[Event], None] = None):
        self.db = db
        self._clock = clock or system_clock
        self._new_id = id_factory or uuid_id
        self._publish_event = event_publisher or event_bus.publish

    def record_payment(self, reservation_id: str, amount: str) -> Payment:
        """写入一条已支付流水（不提交事务）"""
        try:
            parse_decimal_text(amount)
        except ValueError as e:
            raise BookingError(f"Invalid amount: {amount}") from e

        payment = Payment(
            id=self._new_id(),
            reservation_id=reservation_id,
            amount=str(amount).strip(),
            status=PaymentStatus.PAID.value,
            created_date=self._clock(),
            updated_at=None,
        )
        self.db.add(payment)
        self.db.flush()
        return payment

    def publish_payment_received(self, payment: Payment, checked_out: bool) -> None:
        self._publish_event(Event(
            event_type=EventType.PAYMENT_RECEIVED.value,
            timestamp=datetime.now(),
            data=PaymentReceivedData(
                payment_id=payment.id,
                reservation_id=payment.reservation_id,
                amount=payment.amount,
                checked_out=checked_out,
            ),
            source="payment_service"
        ))

    def make_payment(self, reservation_id: str, amount: str) -> PaymentResponse:
        """为预订记一笔付款，不改变房间状态"""
        reservation = self.db.query(Reservation).filter(Reservation.id == reservation_id).first()
        if not reservation:
            raise NotFound("Reservation not found")

        payment = self.record_payment(reservation_id, amount)
        self.db.commit()
        logger.info(f"Payment {payment.id} recorded for reservation {reservation_id}")

        self.publish_payment_received(payment, checked_out=False)
        return PaymentResponse(msg=payment_message(reservation_id), amount=float(payment.amount))

    def get_payment(self, payment_id: str) -> Payment:
        payment = self.db.query(Payment).filter(Payment.id == payment_id).first()
        if not payment:
            raise NotFound("Payment not found")
        return payment

    def get_payment_history(self, reservation_id: str) -> List[Payment]:
        """预订的付款记录"""
        payments = self.db.query(Payment).filter(
            Payment.reservation_id == reservation_id
        ).order_by(Payment.created_date).all()
        if not payments:
            raise NotFound("No payments found for this reservation")
        return payments
