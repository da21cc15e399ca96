"""
Razorpay checkout: create order (priced server-side) and verify the payment signature.
"""
from functools import lru_cache

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.courses import CourseOut
from app.schemas.payments import (
    CreateOrderRequest,
    CreateOrderResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from app.services.auth.jwt import CurrentUser, get_current_user
from app.services.errors import (
    EmptySelectionError,
    InvalidSignature,
    OrderNotFound,
    ProviderError,
    UnknownCourseError,
    UserNotFound,
)
from app.services.payments.razorpay import PaymentProvider, RazorpayClient
from app.services.payments.service import PaymentService

router = APIRouter(prefix="/api/payment", tags=["payment"])


@lru_cache
def get_payment_provider() -> PaymentProvider:
    return RazorpayClient()


@router.post("/create-order", response_model=CreateOrderResponse)
def create_order(
    body: CreateOrderRequest = Body(...),
    current_user: CurrentUser = Depends(get_current_user),
    provider: PaymentProvider = Depends(get_payment_provider),
    db: Session = Depends(get_db),
) -> CreateOrderResponse:
    try:
        result = PaymentService(db, provider).create_order(body.course_ids, current_user.id)
    except EmptySelectionError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No valid courses selected")
    except UnknownCourseError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown course ids: {e.missing_ids}",
        )
    except ProviderError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Could not create order")
    return CreateOrderResponse(
        order=result.order,
        courses=[CourseOut.from_course(c) for c in result.courses],
        amount=result.amount,
    )


@router.post("/verify", response_model=VerifyPaymentResponse)
def verify_payment(
    body: VerifyPaymentRequest = Body(...),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> VerifyPaymentResponse:
    try:
        PaymentService(db).verify_and_grant(
            user_id=current_user.id,
            order_id=body.razorpay_order_id,
            payment_id=body.razorpay_payment_id,
            signature=body.razorpay_signature,
            course_ids=body.course_ids,
        )
    except InvalidSignature:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid signature")
    except OrderNotFound:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown order")
    except UserNotFound:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return VerifyPaymentResponse(success=True)
