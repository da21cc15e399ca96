import copy
import logging

from sqlalchemy.orm import Session

from app.models.course import Course
from app.services.courses.defaults import DEFAULT_COURSES

logger = logging.getLogger(__name__)


class CourseService:
    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> list[Course]:
        return self.db.query(Course).order_by(Course.course_id.asc()).all()

    def get(self, course_id: int) -> Course | None:
        return self.db.query(Course).filter(Course.course_id == course_id).one_or_none()

    def exists(self, course_id: int) -> bool:
        return self.db.query(Course.id).filter(Course.course_id == course_id).first() is not None

    def get_many(self, course_ids: list[int]) -> list[Course]:
        """Courses for the given public ids, in first-requested order; unknown ids are skipped."""
        if not course_ids:
            return []
        found = {
            c.course_id: c
            for c in self.db.query(Course).filter(Course.course_id.in_(set(course_ids))).all()
        }
        ordered: list[Course] = []
        seen: set[int] = set()
        for cid in course_ids:
            if cid in found and cid not in seen:
                ordered.append(found[cid])
                seen.add(cid)
        return ordered

    def seed_default_courses(self, reset: bool = False) -> int:
        """
        Insert the default catalog. reset=True wipes the courses table first.
        Existing courses (by public id) are left untouched. Returns number inserted.
        """
        if reset:
            deleted = self.db.query(Course).delete()
            logger.info("courses_cleared", extra={"count": deleted})
        existing = {cid for (cid,) in self.db.query(Course.course_id).all()}
        inserted = 0
        for data in DEFAULT_COURSES:
            if data["course_id"] in existing:
                continue
            self.db.add(Course(**copy.deepcopy(data)))
            inserted += 1
        self.db.commit()
        logger.info("default_courses_seeded", extra={"count": inserted})
        return inserted
