"""
Razorpay Orders API client using httpx sync client.
Calls go through the payment_provider circuit breaker (4xx rejections do not trip it); any failure surfaces as ProviderError.
"""
import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import httpx
import pybreaker

from app.core.config import settings
from app.services.circuit_breaker import get_circuit_breaker
from app.services.errors import ProviderError
from app.utils.metrics import (
    provider_requests_total,
    provider_request_duration_seconds,
)


logger = logging.getLogger(__name__)


class PaymentProvider(ABC):
    """Hosted payment service that mints orders."""

    @abstractmethod
    def create_order(
        self,
        amount_minor: int,
        currency: str,
        receipt: str,
        notes: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Create an order for amount_minor (hundredths of the currency unit). Raises ProviderError."""


class RazorpayClient(PaymentProvider):
    """
    Sync Razorpay client.
    Basic auth with key id / key secret, bounded timeout, circuit breaker.
    """

    def __init__(
        self,
        key_id: str | None = None,
        key_secret: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        breaker: pybreaker.CircuitBreaker | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._key_id = key_id or settings.razorpay_key_id
        self._key_secret = key_secret or settings.razorpay_key_secret
        self._base_url = (base_url or settings.razorpay_api_base).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.provider_timeout
        self._breaker = breaker or get_circuit_breaker("payment_provider")
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Lazy initialization of httpx client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self._base_url,
                auth=(self._key_id, self._key_secret),
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    def _record_request(self, method: str, status: str, duration: float) -> None:
        provider_requests_total.labels(method=method, status=status).inc()
        provider_request_duration_seconds.labels(method=method).observe(duration)

    @staticmethod
    def _error(resp: httpx.Response) -> ProviderError:
        try:
            body = resp.json()
        except ValueError:
            body = None
        error = body.get("error") if isinstance(body, dict) else None
        if not isinstance(error, dict):
            error = {}
        return ProviderError(
            f"Razorpay API error: {resp.status_code}",
            {
                "status_code": resp.status_code,
                "code": error.get("code"),
                "description": error.get("description"),
            },
        )

    def _post(self, path: str, data: dict) -> httpx.Response:
        """Breaker-guarded POST. Transport errors, 429 and 5xx count as provider failures."""
        resp = self.client.post(path, json=data)
        if resp.status_code == 429 or resp.status_code >= 500:
            raise self._error(resp)
        return resp

    def _parse_order(self, resp: httpx.Response) -> dict[str, Any]:
        # 4xx is a rejected request, not an outage: raised here, outside the breaker
        if resp.status_code >= 400:
            raise self._error(resp)
        try:
            body = resp.json()
        except ValueError as e:
            raise ProviderError("Razorpay returned a malformed order", {"status_code": resp.status_code}) from e
        if not isinstance(body, dict) or not isinstance(body.get("id"), str) or not body["id"]:
            raise ProviderError("Razorpay returned a malformed order", {"status_code": resp.status_code})
        return body

    def create_order(
        self,
        amount_minor: int,
        currency: str,
        receipt: str,
        notes: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        start = time.time()
        data: dict[str, Any] = {"amount": amount_minor, "currency": currency, "receipt": receipt}
        if notes:
            data["notes"] = notes
        try:
            resp = self._breaker.call(self._post, "/orders", data)
            order = self._parse_order(resp)
        except ProviderError as e:
            self._record_request("create_order", "error", time.time() - start)
            logger.error("razorpay_order_failed", extra={"error": str(e), **e.detail})
            raise
        except pybreaker.CircuitBreakerError as e:
            self._record_request("create_order", "circuit_open", time.time() - start)
            logger.error("razorpay_circuit_open", extra={"error": str(e)})
            raise ProviderError("Payment provider temporarily unavailable") from e
        except httpx.HTTPError as e:
            self._record_request("create_order", "error", time.time() - start)
            logger.error("razorpay_request_failed", extra={"error": f"{type(e).__name__}: {e}"})
            raise ProviderError("Payment provider request failed") from e
        self._record_request("create_order", "success", time.time() - start)
        return order

    def close(self) -> None:
        """Close httpx client."""
        if self._client is not None:
            try:
                self._client.close()
            except httpx.HTTPError as e:
                logger.warning("Failed to close client", extra={"error": str(e)})
            finally:
                self._client = None
