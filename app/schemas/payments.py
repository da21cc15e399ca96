from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.courses import CourseOut


class CreateOrderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    course_ids: list[int] = Field(..., alias="courseIds", min_length=1, max_length=100)


class CreateOrderResponse(BaseModel):
    order: dict[str, Any]
    courses: list[CourseOut]
    amount: int


class VerifyPaymentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    razorpay_order_id: str = Field(..., min_length=1)
    razorpay_payment_id: str = Field(..., min_length=1)
    razorpay_signature: str = Field(..., min_length=1)
    # Informational only; the grant uses the course ids stored with the order.
    course_ids: list[int] | None = Field(default=None, alias="courseIds")


class VerifyPaymentResponse(BaseModel):
    success: bool
