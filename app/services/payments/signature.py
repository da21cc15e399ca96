"""
Razorpay payment signature: hex HMAC-SHA256 of "<order_id>|<payment_id>" keyed with the API secret.
"""
import hashlib
import hmac


def sign(order_id: str, payment_id: str, secret: bytes) -> str:
    message = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret, message, hashlib.sha256).hexdigest()


def verify(order_id: str, payment_id: str, provided_signature: str, secret: bytes) -> bool:
    """True only if provided_signature equals the expected hex digest exactly."""
    if not provided_signature:
        return False
    expected = sign(order_id, payment_id, secret)
    return hmac.compare_digest(expected.encode("utf-8"), provided_signature.encode("utf-8"))
