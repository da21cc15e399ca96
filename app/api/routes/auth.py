"""
User authentication routes (JWT-based).
Register / login return { token, user }; login is rate limited per client IP.
"""
from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.users import AuthResponse, LoginRequest, MeResponse, PurchaseOut, RegisterRequest, UserOut
from app.services.auth.jwt import CurrentUser, get_current_user, issue_user_token
from app.services.auth.login_rate_limit import (
    check_login_rate_limit,
    get_client_ip,
    reset_login_attempts,
)
from app.services.errors import EmailAlreadyRegistered, InvalidCredentials
from app.services.purchases.ledger import PurchaseLedger
from app.services.users.service import UserService

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(user) -> AuthResponse:
    return AuthResponse(
        token=issue_user_token(user),
        user=UserOut(id=user.id, name=user.name, email=user.email),
    )


@router.post("/register", response_model=AuthResponse)
def register(body: RegisterRequest = Body(...), db: Session = Depends(get_db)):
    try:
        user = UserService(db).register(body.name, body.email, body.password)
    except EmailAlreadyRegistered:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
def login(request: Request, body: LoginRequest = Body(...), db: Session = Depends(get_db)):
    """
    Login with email + password. Rate limited to prevent brute-force.
    """
    client_ip = get_client_ip(request)
    if not check_login_rate_limit(client_ip, body.email):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many login attempts. Try again later.",
        )

    try:
        user = UserService(db).authenticate(body.email, body.password)
    except InvalidCredentials:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid credentials")

    reset_login_attempts(client_ip, body.email)
    return _auth_response(user)


@router.get("/me", response_model=MeResponse)
def get_me(current_user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    """Current user and their purchases."""
    user = UserService(db).get(current_user.id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    records = PurchaseLedger(db).list_for_user(user.id)
    return MeResponse(
        user=UserOut(id=user.id, name=user.name, email=user.email),
        purchased_courses=[
            PurchaseOut(
                course_id=r.course_id,
                order_id=r.order_id,
                payment_id=r.payment_id,
                purchased_at=r.purchased_at,
            )
            for r in records
        ],
    )
