from sqlalchemy import Column, DateTime, ForeignKey, JSON, Numeric, String, Text, func
from .base import Base, utcnow


class Payment(Base):
    __tablename__ = "payment"

    id = Column(String(36), primary_key=True)
    order_id = Column(String(36), ForeignKey("order.id"), nullable=False, index=True)
    # gateway payment id; repeated deliveries of one notification share it
    payment_id = Column(String(128), nullable=True)
    payment_method = Column(String(16), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    status = Column(String(16), nullable=False, default="pending", index=True)
    transaction_id = Column(String(128), nullable=True)
    payment_data = Column(JSON, nullable=False, default=dict)
    failure_reason = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, server_default=func.now(), index=True)
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
