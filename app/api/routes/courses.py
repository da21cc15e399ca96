"""
Catalog routes. Two capability levels:
public metadata (no auth) and owned content (bearer token + purchase).
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.paywall import AccessGuard
from app.schemas.courses import CourseContentOut, CourseOut
from app.services.auth.jwt import CurrentUser, get_current_user
from app.services.courses.service import CourseService
from app.services.errors import AccessForbidden, CourseNotFound

router = APIRouter(prefix="/api/courses", tags=["courses"])


def _course_id(raw: str) -> int:
    """Path ids that are not positive integers name no course: 404, like an unknown id."""
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if not 0 < value < 2**31:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return value


@router.get("", response_model=list[CourseOut])
def list_courses(db: Session = Depends(get_db)) -> list[CourseOut]:
    return [CourseOut.from_course(c) for c in CourseService(db).list_all()]


@router.get("/{course_id}", response_model=CourseOut)
def get_course(course_id: str, db: Session = Depends(get_db)) -> CourseOut:
    course = CourseService(db).get(_course_id(course_id))
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return CourseOut.from_course(course)


@router.get("/{course_id}/content", response_model=CourseContentOut)
def get_course_content(
    course_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CourseContentOut:
    """Full modules with video URLs; only for users who bought the course."""
    try:
        modules = AccessGuard(db).get_protected_content(current_user.id, _course_id(course_id))
    except CourseNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    except AccessForbidden:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You do not own this course")
    return CourseContentOut(modules=modules)
