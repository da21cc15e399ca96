"""Tests for AccessGuard against a real (SQLite) session."""
import pytest

from app.paywall import AccessGuard
from app.services.errors import AccessForbidden, CourseNotFound
from app.services.purchases.ledger import PurchaseLedger


def _grant(db, user_id, course_id):
    PurchaseLedger(db).add_missing(user_id, [course_id], "order_x", "pay_x")
    db.commit()


def test_forbidden_before_purchase(catalog, make_user):
    user = make_user()
    guard = AccessGuard(catalog)
    assert guard.has_access(user.id, 1) is False
    with pytest.raises(AccessForbidden):
        guard.get_protected_content(user.id, 1)


def test_owner_gets_unfiltered_modules(catalog, make_user):
    user = make_user()
    _grant(catalog, user.id, 1)
    modules = AccessGuard(catalog).get_protected_content(user.id, 1)
    assert modules[0]["title"] == "Python Fundamentals"
    assert modules[0]["lessons"][0]["videoUrl"].endswith("/videos/python/m1-l1-20s.mp4")


def test_missing_course_is_not_found_even_for_stranger(catalog, make_user):
    user = make_user()
    with pytest.raises(CourseNotFound):
        AccessGuard(catalog).get_protected_content(user.id, 999)


def test_access_is_monotonic(catalog, make_user):
    user = make_user()
    _grant(catalog, user.id, 2)
    guard = AccessGuard(catalog)
    assert guard.has_access(user.id, 2)
    # later purchases never take earlier access away
    _grant(catalog, user.id, 3)
    _grant(catalog, user.id, 2)
    assert guard.has_access(user.id, 2)
    assert guard.has_access(user.id, 3)


def test_access_independent_between_users(catalog, make_user):
    u1 = make_user("u1@x.com")
    u2 = make_user("u2@x.com")
    _grant(catalog, u2.id, 1)
    guard = AccessGuard(catalog)
    assert guard.has_access(u2.id, 1)
    assert guard.has_access(u1.id, 1) is False
    with pytest.raises(AccessForbidden):
        guard.get_protected_content(u1.id, 1)
