"""
AccessGuard: I/O around decide_access: loads the course and the user's purchases.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from app.paywall.access import decide_access
from app.paywall.audit import record_access
from app.paywall.models import AccessContext
from app.services.courses.service import CourseService
from app.services.errors import AccessForbidden, CourseNotFound
from app.services.purchases.ledger import PurchaseLedger


class AccessGuard:
    def __init__(self, db: Session):
        self.db = db
        self.ledger = PurchaseLedger(db)

    def has_access(self, user_id: str, course_id: int) -> bool:
        return self.ledger.has(user_id, course_id)

    def get_protected_content(self, user_id: str, course_id: int) -> list[dict[str, Any]]:
        """
        Full module/lesson tree with video URLs for an owner.
        Raises CourseNotFound before AccessForbidden, so ownership is never probed for missing courses.
        """
        course = CourseService(self.db).get(course_id)
        owned = frozenset(self.ledger.owned_course_ids(user_id)) if course is not None else frozenset()
        decision = decide_access(AccessContext(
            user_id=user_id,
            course_id=course_id,
            course_exists=course is not None,
            owned_course_ids=owned,
        ))
        record_access(user_id, course_id, decision.reason)
        if decision.reason == "course_not_found":
            raise CourseNotFound("Course not found", {"course_id": course_id})
        if not decision.allowed:
            raise AccessForbidden("You do not own this course", {"course_id": course_id})
        return list(course.modules or [])
