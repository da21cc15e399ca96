"""
Shared fixtures: temporary SQLite database, fake payment provider, API client.
Env vars are set before anything imports app.core.config.
"""
import os
import tempfile
from itertools import count

os.environ.setdefault("DATABASE_URL", f"sqlite:///{tempfile.gettempdir()}/course_store_test_default.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key-0123456789")
os.environ.setdefault("RAZORPAY_KEY_ID", "rzp_test_key")
os.environ.setdefault("RAZORPAY_KEY_SECRET", "rzp_test_secret")
os.environ.setdefault("CB_STORAGE", "memory")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.db.base import Base, import_models
from app.services.courses.service import CourseService
from app.services.errors import ProviderError
from app.services.payments.razorpay import PaymentProvider
from app.services.payments.signature import sign
from app.services.users.service import UserService

KEY_SECRET = os.environ["RAZORPAY_KEY_SECRET"]


class FakeProvider(PaymentProvider):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[dict] = []
        self._ids = count(1)

    def create_order(self, amount_minor, currency, receipt, notes=None):
        self.calls.append({"amount": amount_minor, "currency": currency, "receipt": receipt, "notes": notes})
        if self.fail:
            raise ProviderError("Razorpay API error: 502")
        return {
            "id": f"order_test{next(self._ids)}",
            "entity": "order",
            "amount": amount_minor,
            "currency": currency,
            "receipt": receipt,
            "status": "created",
        }


def _proof(order_id: str, payment_id: str = "pay_test1") -> dict:
    """Checkout response as Razorpay would hand it to the client."""
    return {
        "razorpay_order_id": order_id,
        "razorpay_payment_id": payment_id,
        "razorpay_signature": sign(order_id, payment_id, KEY_SECRET.encode("utf-8")),
    }


@pytest.fixture
def proof():
    return _proof


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    import_models()
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def catalog(db):
    CourseService(db).seed_default_courses()
    return db


@pytest.fixture
def make_user(db):
    def _make(email: str = "a@x.com", password: str = "pw", name: str = "A"):
        return UserService(db).register(name, email, password)
    return _make


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def failing_provider():
    return FakeProvider(fail=True)


@pytest.fixture
def client(session_factory, provider, monkeypatch):
    from app.api.routes import auth as auth_routes
    from app.api.routes.payments import get_payment_provider
    from app.db.session import get_db
    from app.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    monkeypatch.setattr(auth_routes, "check_login_rate_limit", lambda ip, email=None: True)
    monkeypatch.setattr(auth_routes, "reset_login_attempts", lambda ip, email=None: None)
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_provider] = lambda: provider

    seed = session_factory()
    try:
        CourseService(seed).seed_default_courses()
    finally:
        seed.close()

    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
