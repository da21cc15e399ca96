"""
PaymentOrder: local copy of a provider order.
Holds the course ids that were priced, so verification grants exactly those.
"""
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer, String
from sqlalchemy.dialects.postgresql import JSONB

from app.db.base import Base


class PaymentOrder(Base):
    __tablename__ = "payment_orders"

    id = Column(String, primary_key=True)  # provider order id (order_...)
    user_id = Column(String, nullable=False, index=True)
    course_ids = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)  # [1, 3]
    amount = Column(Integer, nullable=False)  # major units; provider got amount * 100
    currency = Column(String, nullable=False)
    receipt = Column(String, nullable=False)
    status = Column(String, nullable=False, default="created")  # created / paid
    payment_id = Column(String, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    paid_at = Column(DateTime(timezone=True), nullable=True)
