"""
PaymentService: course purchases through Razorpay.

Responsibilities:
- Pricing requested courses and creating the provider order (course ids stored locally with the order)
- Verifying the payment signature returned by checkout
- Atomic, idempotent grant of the order's courses to the buyer
"""
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.course import Course
from app.models.payment_order import PaymentOrder
from app.paywall.audit import record_grant
from app.services.courses.service import CourseService
from app.services.errors import (
    EmptySelectionError,
    InvalidSignature,
    OrderNotFound,
    UnknownCourseError,
    UserNotFound,
)
from app.services.payments.razorpay import PaymentProvider
from app.services.payments.signature import verify as verify_signature
from app.services.purchases.ledger import PurchaseLedger
from app.services.users.service import UserService
from app.utils.metrics import payment_orders_created_total, payment_verifications_total

logger = logging.getLogger(__name__)

MINOR_UNITS = 100  # provider amounts are in paise


@dataclass
class OrderResult:
    order: dict[str, Any]
    courses: list[Course]
    amount: int  # major units


@dataclass
class GrantResult:
    order_id: str
    payment_id: str
    granted_course_ids: list[int] = field(default_factory=list)
    already_owned_course_ids: list[int] = field(default_factory=list)


def _dedupe(ids: list[int]) -> list[int]:
    return list(dict.fromkeys(ids))


class PaymentService:
    def __init__(
        self,
        db: Session,
        provider: PaymentProvider | None = None,
        *,
        key_secret: str | None = None,
        currency: str | None = None,
        unknown_course_policy: str | None = None,
    ):
        self.db = db
        self.provider = provider
        self._key_secret = key_secret or settings.razorpay_key_secret
        self.currency = currency or settings.payment_currency
        self.unknown_course_policy = unknown_course_policy or settings.order_unknown_course_policy

    # ------------------------------------------------------------------
    # Order creation
    # ------------------------------------------------------------------

    def create_order(self, course_ids: list[int], user_id: str) -> OrderResult:
        """
        Price the requested courses and create a provider order for them.
        Raises EmptySelectionError, UnknownCourseError (reject policy) or ProviderError.
        """
        if self.provider is None:
            raise RuntimeError("PaymentService.create_order requires a payment provider")

        requested = _dedupe(course_ids)
        courses = CourseService(self.db).get_many(requested)
        found_ids = {c.course_id for c in courses}
        missing = [cid for cid in requested if cid not in found_ids]
        if missing:
            if self.unknown_course_policy == "reject":
                raise UnknownCourseError(missing)
            logger.info("order_unknown_courses_dropped", extra={"user_id": user_id, "course_ids": missing})
        if not courses:
            raise EmptySelectionError("No known courses in selection", {"course_ids": requested})

        amount = sum(c.price for c in courses)
        receipt = f"receipt_{int(time.time() * 1000)}"
        order = self.provider.create_order(
            amount_minor=amount * MINOR_UNITS,
            currency=self.currency,
            receipt=receipt,
            notes={"user_id": user_id},
        )

        self.db.add(PaymentOrder(
            id=order["id"],
            user_id=user_id,
            course_ids=[c.course_id for c in courses],
            amount=amount,
            currency=self.currency,
            receipt=receipt,
            status="created",
        ))
        self.db.commit()
        payment_orders_created_total.inc()
        logger.info(
            "payment_order_created",
            extra={
                "user_id": user_id,
                "order_id": order["id"],
                "course_ids": [c.course_id for c in courses],
                "amount": amount,
                "currency": self.currency,
            },
        )
        return OrderResult(order=order, courses=courses, amount=amount)

    # ------------------------------------------------------------------
    # Verification & grant
    # ------------------------------------------------------------------

    def verify_and_grant(
        self,
        user_id: str,
        order_id: str,
        payment_id: str,
        signature: str,
        course_ids: list[int] | None = None,
    ) -> GrantResult:
        """
        Check the checkout signature, then grant the courses stored with the order.
        course_ids from the client are never trusted; a mismatch is only logged.
        Idempotent: re-submitting the same proof grants nothing new and still succeeds.
        """
        if not verify_signature(order_id, payment_id, signature, self._key_secret.encode("utf-8")):
            payment_verifications_total.labels(result="invalid_signature").inc()
            logger.warning(
                "payment_signature_rejected",
                extra={"user_id": user_id, "order_id": order_id, "payment_id": payment_id},
            )
            raise InvalidSignature("Invalid signature")

        order = self.db.query(PaymentOrder).filter(PaymentOrder.id == order_id).one_or_none()
        if order is None or order.user_id != user_id:
            payment_verifications_total.labels(result="unknown_order").inc()
            logger.warning("payment_order_not_found", extra={"user_id": user_id, "order_id": order_id})
            raise OrderNotFound("Unknown order")

        if course_ids is not None and set(course_ids) != set(order.course_ids):
            logger.warning(
                "payment_course_ids_mismatch",
                extra={"user_id": user_id, "order_id": order_id, "course_ids": course_ids},
            )

        try:
            result = self._apply_grant(user_id, order_id, payment_id)
        except IntegrityError:
            # concurrent grant for the same user won the unique constraint; re-read and apply once more
            self.db.rollback()
            logger.warning("purchase_grant_conflict", extra={"user_id": user_id, "order_id": order_id})
            result = self._apply_grant(user_id, order_id, payment_id)

        payment_verifications_total.labels(result="granted").inc()
        record_grant(user_id, order_id, payment_id, result.granted_course_ids)
        return result

    def _apply_grant(self, user_id: str, order_id: str, payment_id: str) -> GrantResult:
        user = UserService(self.db).get_for_update(user_id)
        if user is None:
            self.db.rollback()
            payment_verifications_total.labels(result="user_not_found").inc()
            logger.error("payment_user_not_found", extra={"user_id": user_id, "order_id": order_id})
            raise UserNotFound("User not found")

        order = self.db.query(PaymentOrder).filter(PaymentOrder.id == order_id).with_for_update().one()
        course_ids = _dedupe(list(order.course_ids))
        added = PurchaseLedger(self.db).add_missing(user.id, course_ids, order.id, payment_id)

        if order.status != "paid":
            order.status = "paid"
            order.payment_id = payment_id
            order.paid_at = datetime.now(timezone.utc)

        granted = [r.course_id for r in added]
        self.db.commit()
        return GrantResult(
            order_id=order_id,
            payment_id=payment_id,
            granted_course_ids=granted,
            already_owned_course_ids=[cid for cid in course_ids if cid not in granted],
        )
