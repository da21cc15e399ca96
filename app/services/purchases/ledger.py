"""
PurchaseLedger: per-user, append-only, de-duplicated purchase records.
Stages rows in the caller's session; the caller owns the transaction (single commit).
"""
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from app.models.purchase import PurchaseRecord


class PurchaseLedger:
    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: str) -> list[PurchaseRecord]:
        return (
            self.db.query(PurchaseRecord)
            .filter(PurchaseRecord.user_id == user_id)
            .order_by(PurchaseRecord.purchased_at.asc(), PurchaseRecord.id.asc())
            .all()
        )

    def owned_course_ids(self, user_id: str) -> set[int]:
        rows = (
            self.db.query(PurchaseRecord.course_id)
            .filter(PurchaseRecord.user_id == user_id)
            .all()
        )
        return {course_id for (course_id,) in rows}

    def has(self, user_id: str, course_id: int) -> bool:
        return (
            self.db.query(PurchaseRecord.id)
            .filter(PurchaseRecord.user_id == user_id, PurchaseRecord.course_id == course_id)
            .first()
            is not None
        )

    def add_missing(
        self,
        user_id: str,
        course_ids: list[int],
        order_id: str,
        payment_id: str,
        purchased_at: datetime | None = None,
    ) -> list[PurchaseRecord]:
        """
        Add a record for every course id the user does not own yet.
        Already-owned and repeated ids are skipped. Returns the new (flushed, uncommitted) records.
        """
        now = purchased_at or datetime.now(timezone.utc)
        owned = self.owned_course_ids(user_id)
        added: list[PurchaseRecord] = []
        for course_id in course_ids:
            if course_id in owned:
                continue
            record = PurchaseRecord(
                user_id=user_id,
                course_id=course_id,
                order_id=order_id,
                payment_id=payment_id,
                purchased_at=now,
            )
            self.db.add(record)
            added.append(record)
            owned.add(course_id)
        if added:
            self.db.flush()
        return added
