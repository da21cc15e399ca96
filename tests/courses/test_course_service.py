from app.models.course import Course
from app.services.courses.service import CourseService


def test_seed_inserts_default_catalog(db):
    inserted = CourseService(db).seed_default_courses()
    assert inserted == 5
    courses = CourseService(db).list_all()
    assert [c.course_id for c in courses] == [1, 2, 3, 4, 5]
    assert {c.course_id: c.price for c in courses} == {1: 1999, 2: 2499, 3: 999, 4: 1499, 5: 2999}


def test_seed_is_idempotent(db):
    svc = CourseService(db)
    svc.seed_default_courses()
    assert svc.seed_default_courses() == 0
    assert db.query(Course).count() == 5


def test_seed_reset_restores_edited_course(db):
    svc = CourseService(db)
    svc.seed_default_courses()
    course = svc.get(1)
    course.price = 1
    db.commit()

    assert svc.seed_default_courses() == 0
    assert svc.get(1).price == 1

    assert svc.seed_default_courses(reset=True) == 5
    assert svc.get(1).price == 1999


def test_get_many_keeps_request_order_and_skips_unknown(catalog):
    courses = CourseService(catalog).get_many([5, 99, 2, 5])
    assert [c.course_id for c in courses] == [5, 2]


def test_get_many_empty(catalog):
    assert CourseService(catalog).get_many([]) == []


def test_get_and_exists(catalog):
    svc = CourseService(catalog)
    assert svc.get(3).title
    assert svc.get(42) is None
    assert svc.exists(4)
    assert not svc.exists(42)


def test_modules_keep_video_urls_in_storage(catalog):
    course = CourseService(catalog).get(1)
    lesson = course.modules[0]["lessons"][0]
    assert lesson["title"] == "Introduction to Python"
    assert lesson["videoUrl"].endswith("/videos/python/m1-l1-20s.mp4")
