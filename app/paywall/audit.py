"""
Purchase and access audit events (structured logs for analytics).
"""
from __future__ import annotations

import logging

from app.utils.metrics import content_access_total, purchase_grants_total

logger = logging.getLogger(__name__)


def record_grant(
    user_id: str,
    order_id: str,
    payment_id: str,
    course_ids: list[int],
) -> None:
    """
    Record a verified purchase. Call only after the grant is committed.
    course_ids are the newly granted ones; empty on a repeated verification.
    """
    if course_ids:
        purchase_grants_total.inc(len(course_ids))
    logger.info(
        "purchase_granted",
        extra={
            "user_id": user_id,
            "order_id": order_id,
            "payment_id": payment_id,
            "course_ids": course_ids,
        },
    )


def record_access(user_id: str, course_id: int, reason: str) -> None:
    decision = {"owned": "allowed", "not_purchased": "forbidden"}.get(reason, "not_found")
    content_access_total.labels(decision=decision).inc()
    if decision != "allowed":
        logger.info(
            "content_access_denied",
            extra={"user_id": user_id, "course_id": course_id, "error": reason},
        )
