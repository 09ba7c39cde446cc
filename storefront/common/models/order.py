from decimal import Decimal

from sqlalchemy import Column, DateTime, JSON, Numeric, String, func
from .base import Base, utcnow


ORDER_STATUSES = ("PENDING", "PAID", "PROCESSING", "SHIPPED", "DELIVERED", "CANCELLED", "FAILED")
PAYMENT_METHODS = ("PAYHERE", "WEBXPAY", "COD")


class Order(Base):
    __tablename__ = "order"

    id = Column(String(36), primary_key=True)
    # absent for guest checkout
    user_id = Column(String(128), nullable=True, index=True)
    email = Column(String(255), nullable=False, index=True)
    first_name = Column(String(128), nullable=False)
    last_name = Column(String(128), nullable=False)
    phone = Column(String(32), nullable=False)
    shipping_address = Column(JSON, nullable=False)
    status = Column(String(32), nullable=False, default="PENDING", index=True)
    payment_method = Column(String(16), nullable=True)
    payment_status = Column(String(32), nullable=False, default="pending")
    payment_id = Column(String(128), nullable=True, index=True)
    transaction_id = Column(String(128), nullable=True)
    tracking_number = Column(String(128), nullable=True)
    items = Column(JSON, nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow, server_default=func.now(), index=True)
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    @property
    def order_number(self) -> str:
        return f"ORD-{self.id[-8:].upper()}"

    @property
    def subtotal(self) -> Decimal:
        return sum(
            (Decimal(str(it["priceAtPurchase"])) * int(it["quantity"]) for it in self.items or []),
            Decimal("0"),
        )
