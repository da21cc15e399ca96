import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.user import User
from app.services.auth.passwords import hash_password, verify_password
from app.services.errors import EmailAlreadyRegistered, InvalidCredentials

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> User | None:
        return self.db.query(User).filter(User.id == user_id).one_or_none()

    def get_for_update(self, user_id: str) -> User | None:
        """Row-locked read; serializes purchase grants per user until commit."""
        return (
            self.db.query(User)
            .filter(User.id == user_id)
            .with_for_update()
            .one_or_none()
        )

    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == normalize_email(email)).one_or_none()

    def register(self, name: str, email: str, password: str) -> User:
        if self.get_by_email(email) is not None:
            raise EmailAlreadyRegistered("Email already registered")
        user = User(name=name.strip(), email=normalize_email(email), password_hash=hash_password(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # concurrent registration with the same email
            self.db.rollback()
            raise EmailAlreadyRegistered("Email already registered") from e
        self.db.refresh(user)
        logger.info("user_registered", extra={"user_id": user.id})
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise InvalidCredentials("Invalid credentials")
        return user
