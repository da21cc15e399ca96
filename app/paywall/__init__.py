"""
Paywall for course content (internal library).
Decision (access) and I/O (guard) are separate; the contract is AccessContext.
"""
from app.paywall.access import decide_access
from app.paywall.audit import record_access, record_grant
from app.paywall.guard import AccessGuard
from app.paywall.models import AccessContext, AccessDecision

__all__ = [
    "AccessContext",
    "AccessDecision",
    "AccessGuard",
    "decide_access",
    "record_access",
    "record_grant",
]
