"""
DTO paywall: AccessContext (input of decide_access) and AccessDecision.
"""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


# ----- Input for decide_access (single contract so I/O stays out of the decision) -----


class AccessContext(BaseModel):
    """Everything decide_access needs: who asks, for what, and what they own."""

    user_id: str
    course_id: int
    course_exists: bool
    owned_course_ids: frozenset[int] = frozenset()

    model_config = {"frozen": True}


# ----- Access decision (pure logic, no I/O) -----


AccessReason = Literal["owned", "not_purchased", "course_not_found"]


class AccessDecision(BaseModel):
    """Result of decide_access: release protected content or not, and why."""

    allowed: bool = Field(..., description="True = return full modules with video URLs")
    reason: AccessReason

    model_config = {"frozen": True}
