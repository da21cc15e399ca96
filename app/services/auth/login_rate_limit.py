"""
Fixed-window login throttle kept in Redis.
Attempts are counted per client IP and per email; a successful login clears both.
A Redis outage never blocks logins.
"""
import logging

import redis
from starlette.requests import Request

from app.core.config import settings

logger = logging.getLogger("auth")

KEY_PREFIX = "login_attempts"

_client: redis.Redis | None = None


def _redis() -> redis.Redis:
    global _client
    if _client is None:
        _client = redis.Redis.from_url(settings.redis_url, decode_responses=True, socket_timeout=2)
    return _client


def _keys(client_ip: str, email: str | None) -> list[str]:
    keys = [f"{KEY_PREFIX}:ip:{client_ip}"]
    if email:
        keys.append(f"{KEY_PREFIX}:email:{email.strip().lower()}")
    return keys


def get_client_ip(request: Request) -> str:
    """Peer address. X-Forwarded-For is honoured only in production and only from a trusted proxy."""
    peer = request.client.host if request.client else "127.0.0.1"
    if settings.app_env != "production" or peer not in settings.trusted_proxy_ips_set:
        return peer
    forwarded = request.headers.get("X-Forwarded-For", "").split(",")[0].strip()
    return forwarded or peer


def check_login_rate_limit(client_ip: str, email: str | None = None) -> bool:
    """True if this attempt may proceed. Every call counts as an attempt."""
    try:
        client = _redis()
        attempts = 0
        for key in _keys(client_ip, email):
            current = client.incr(key)
            if current == 1:
                client.expire(key, settings.login_rate_limit_window_seconds)
            attempts = max(attempts, current)
    except redis.RedisError as e:
        logger.warning("login_rate_limit_unavailable", extra={"ip": client_ip, "error": str(e)})
        return True

    if attempts > settings.login_rate_limit_attempts:
        logger.warning("login_rate_limited", extra={"ip": client_ip, "attempts": attempts})
        return False
    return True


def reset_login_attempts(client_ip: str, email: str | None = None) -> None:
    try:
        _redis().delete(*_keys(client_ip, email))
    except redis.RedisError as e:
        logger.warning("login_rate_limit_unavailable", extra={"ip": client_ip, "error": str(e)})
