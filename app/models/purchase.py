"""
PurchaseRecord: one row per (user, course) that was paid for.
Immutable once written; (user_id, course_id) is unique.
"""
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base


class PurchaseRecord(Base):
    __tablename__ = "purchases"
    __table_args__ = (UniqueConstraint("user_id", "course_id", name="uq_purchase_user_course"),)

    id = Column(String, primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    course_id = Column(Integer, nullable=False)  # public Course.course_id
    order_id = Column(String, nullable=False)  # provider order id
    payment_id = Column(String, nullable=False)  # provider payment id
    purchased_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    user = relationship("User", back_populates="purchases")
