from sqlalchemy.orm import declarative_base


Base = declarative_base()


def import_models() -> None:
    """Register every model on Base.metadata (create_all, scripts)."""
    from app.models import course, payment_order, purchase, user  # noqa: F401
