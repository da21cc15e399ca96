"""
Decision only: decide_access(ctx) -> AccessDecision.
Pure function, no I/O. Ownership of a purchase record is the only way in.
"""
from __future__ import annotations

from app.paywall.models import AccessContext, AccessDecision


def decide_access(ctx: AccessContext) -> AccessDecision:
    """
    Decide whether protected course content may be released.

    - course missing -> denied, course_not_found (checked first: existence is a precondition)
    - course id in the user's purchases -> allowed
    - otherwise -> denied, not_purchased
    """
    if not ctx.course_exists:
        return AccessDecision(allowed=False, reason="course_not_found")

    if ctx.course_id in ctx.owned_course_ids:
        return AccessDecision(allowed=True, reason="owned")

    return AccessDecision(allowed=False, reason="not_purchased")
