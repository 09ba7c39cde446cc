from typing import Dict
from uuid import uuid4
from decimal import Decimal, InvalidOperation
from ..db.session import get_session
from ..models.order import Order
from ..models.payment import Payment
from ..utils.dto import to_order_dto, to_payment_dto
from .errors import NotFoundError
from .logging import log_event


GATEWAY_COMPLETED = "2"
GATEWAY_FAILED = "-2"


class PaymentService:
    """Payment records and the order status transitions they drive."""

    def __init__(self, session_factory=get_session, currency: str = "LKR"):
        self._session_factory = session_factory
        self._currency = currency

    @staticmethod
    def _amount(raw) -> Decimal:
        try:
            return Decimal(str(raw))
        except (InvalidOperation, ValueError):
            return Decimal("0")

    def apply_gateway_notification(self, notification) -> str:
        """Apply an already-verified PayHere notification.

        Returns the outcome: ``completed``, ``failed`` or ``ignored``.
        Codes other than success / failure leave every record untouched.
        """
        code = notification.status_code
        if code not in (GATEWAY_COMPLETED, GATEWAY_FAILED):
            log_event("info", "payment.webhook.ignored", order_id=notification.order_id, status_code=code)
            return "ignored"

        with self._session_factory() as session:
            order = session.get(Order, notification.order_id)
            if order is None:
                raise NotFoundError(f"Order not found: {notification.order_id}")
            payment = Payment(
                id=str(uuid4()),
                order_id=order.id,
                payment_id=notification.payment_id or None,
                payment_method="payhere",
                amount=self._amount(notification.payhere_amount),
                currency=notification.payhere_currency or self._currency,
                transaction_id=notification.payment_id or None,
                payment_data=notification.model_dump(),
            )
            if code == GATEWAY_COMPLETED:
                order.status = "PAID"
                order.payment_status = "completed"
                order.transaction_id = notification.payment_id
                order.payment_id = notification.payment_id
                payment.status = "completed"
                outcome = "completed"
            else:
                order.status = "FAILED"
                order.payment_status = "failed"
                payment.status = "failed"
                payment.failure_reason = "Payment declined"
                outcome = "failed"
            session.add(payment)
            session.flush()
            log_event(
                "info" if outcome == "completed" else "warning",
                f"payment.webhook.{outcome}",
                order_id=order.id,
                payment_id=notification.payment_id,
                amount=notification.payhere_amount,
                currency=notification.payhere_currency,
            )
            return outcome

    def confirm_cod(self, order_id: str) -> Dict:
        """Mark an order as cash-on-delivery and log a pending payment for its total."""
        with self._session_factory() as session:
            order = session.get(Order, order_id)
            if order is None:
                raise NotFoundError("Order not found")
            order.payment_method = "COD"
            order.payment_status = "pending"
            order.status = "PENDING"
            session.add(
                Payment(
                    id=str(uuid4()),
                    order_id=order.id,
                    payment_method="cod",
                    amount=order.total_amount,
                    currency=self._currency,
                    status="pending",
                    payment_data={},
                )
            )
            session.flush()
            log_event("info", "payment.cod.confirmed", order_id=order.id, amount=float(order.total_amount))
            return to_order_dto(order)

    def get_status(self, order_id: str) -> Dict:
        with self._session_factory() as session:
            order = session.get(Order, order_id)
            if order is None:
                raise NotFoundError("Order not found")
            latest = (
                session.query(Payment)
                .filter(Payment.order_id == order_id)
                .order_by(Payment.created_at.desc(), Payment.id.desc())
                .first()
            )
            return {
                "payment": to_payment_dto(latest) if latest else None,
                "order": {
                    "status": order.status,
                    "paymentStatus": order.payment_status,
                    "transactionId": order.transaction_id,
                },
            }

    def list_for_order(self, order_id: str):
        with self._session_factory() as session:
            rows = (
                session.query(Payment)
                .filter(Payment.order_id == order_id)
                .order_by(Payment.created_at.asc(), Payment.id.asc())
                .all()
            )
            return [to_payment_dto(p) for p in rows]
