"""
Named pybreaker circuit breakers for outbound provider calls.
State lives in one Redis hash per breaker so every API worker sees the same
open/closed state; CB_STORAGE=memory keeps it per process (tests, single worker).
"""
import logging
from datetime import datetime, timezone

import redis
import pybreaker

from app.core.config import settings
from app.utils.metrics import circuit_breaker_state


logger = logging.getLogger("circuit_breaker")


def _state_value(state) -> int:
    return 1 if getattr(state, "name", state) == pybreaker.STATE_OPEN else 0


class RedisCircuitBreakerStorage(pybreaker.CircuitBreakerStorage):
    """
    Hash `cb:<name>` with fields state, failures, successes, opened_at.
    Fails open: while Redis is unreachable the breaker reads as closed with zero
    counters and writes are dropped, so provider calls still go out.
    """

    def __init__(self, name: str, client: redis.Redis | None = None) -> None:
        super().__init__(name)
        self.breaker_name = name
        self.key = f"cb:{name}"
        self.client = client or redis.Redis.from_url(
            settings.redis_url, decode_responses=True, socket_connect_timeout=2, socket_timeout=2
        )
        # entries outlive an open period long enough to be seen by other workers
        self.ttl = max(settings.cb_open_seconds * 4, 60)

    def _unavailable(self, e: redis.RedisError) -> None:
        logger.warning(
            "circuit_breaker_storage_unavailable",
            extra={"breaker_name": self.breaker_name, "error": f"{type(e).__name__}: {e}"},
        )

    def _get(self, field: str) -> str | None:
        try:
            return self.client.hget(self.key, field)
        except redis.RedisError as e:
            self._unavailable(e)
            return None

    def _write(self, op: str, field: str, value) -> None:
        try:
            pipe = self.client.pipeline()
            getattr(pipe, op)(self.key, field, value)
            pipe.expire(self.key, self.ttl)
            pipe.execute()
        except redis.RedisError as e:
            self._unavailable(e)

    def _set(self, field: str, value) -> None:
        self._write("hset", field, value)

    def _incr(self, field: str) -> None:
        self._write("hincrby", field, 1)

    @property
    def state(self) -> str:
        return self._get("state") or pybreaker.STATE_CLOSED

    @state.setter
    def state(self, value: str) -> None:
        self._set("state", value)

    @property
    def counter(self) -> int:
        return int(self._get("failures") or 0)

    def increment_counter(self) -> None:
        self._incr("failures")

    def reset_counter(self) -> None:
        self._set("failures", 0)

    @property
    def success_counter(self) -> int:
        return int(self._get("successes") or 0)

    def increment_success_counter(self) -> None:
        self._incr("successes")

    def reset_success_counter(self) -> None:
        self._set("successes", 0)

    @property
    def opened_at(self) -> datetime | None:
        raw = self._get("opened_at")
        return datetime.fromtimestamp(float(raw), tz=timezone.utc) if raw else None

    @opened_at.setter
    def opened_at(self, dt: datetime) -> None:
        self._set("opened_at", dt.timestamp())


class CircuitBreakerListener(pybreaker.CircuitBreakerListener):
    """Logs transitions and failures; mirrors the state into the circuit_breaker_state gauge."""

    def __init__(self, name: str) -> None:
        self.name = name

    def state_change(self, cb: pybreaker.CircuitBreaker, old_state, new_state) -> None:
        logger.warning(
            "circuit_breaker_state_change",
            extra={
                "breaker_name": self.name,
                "old_state": getattr(old_state, "name", old_state),
                "new_state": getattr(new_state, "name", new_state),
            },
        )
        circuit_breaker_state.labels(name=self.name).set(_state_value(new_state))

    def failure(self, cb: pybreaker.CircuitBreaker, exc: BaseException) -> None:
        logger.warning(
            "circuit_breaker_failure",
            extra={"breaker_name": self.name, "error": type(exc).__name__},
        )


_breakers: dict[str, pybreaker.CircuitBreaker] = {}


def _make_storage(name: str) -> pybreaker.CircuitBreakerStorage:
    if settings.cb_storage == "memory":
        return pybreaker.CircuitMemoryStorage(pybreaker.STATE_CLOSED)
    return RedisCircuitBreakerStorage(name)


def get_circuit_breaker(name: str) -> pybreaker.CircuitBreaker:
    """Process-wide breaker for `name`, created on first use."""
    breaker = _breakers.get(name)
    if breaker is None:
        breaker = pybreaker.CircuitBreaker(
            fail_max=settings.cb_failure_threshold,
            reset_timeout=settings.cb_open_seconds,
            state_storage=_make_storage(name),
            listeners=[CircuitBreakerListener(name)],
            name=name,
        )
        _breakers[name] = breaker
    return breaker
