"""
HTTP transport session shared by all API bindings.
"""

import time
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from shared.config import Settings, get_config
from shared.errors import APIError, Problem, TransportError
from shared.logging import get_logger, get_request_id
from shared.metrics import MetricsCollector, get_metrics_collector
from shared.retry import RetryConfig, RetryError, retry_on_exception

ModelT = TypeVar("ModelT", bound=BaseModel)


class Session:
    """Executes single request/response exchanges against the vendor API.

    The session never interprets status codes; that is left to the
    bindings. Only failures that produce no response at all (connection
    errors, timeouts) are retried.
    """

    def __init__(self,
                 config: Optional[Settings] = None,
                 auth: Optional[httpx.Auth] = None,
                 metrics: Optional[MetricsCollector] = None):
        self.config = config or get_config()
        self.base_url = self.config.base_url.rstrip('/')
        self.auth = auth
        self.logger = get_logger("session.http")
        self.metrics = metrics or get_metrics_collector()

        self.retry_config = RetryConfig(
            max_attempts=self.config.retry_max_attempts,
            base_delay=self.config.retry_base_delay,
            max_delay=self.config.retry_max_delay,
            exponential_base=2.0,
            jitter=True
        )

    async def exec(self,
                   method: str,
                   path: str,
                   *,
                   operation: Optional[str] = None,
                   params: Optional[Dict[str, str]] = None,
                   headers: Optional[Dict[str, str]] = None,
                   json: Any = None) -> httpx.Response:
        """Send one request and return the raw response."""
        operation = operation or path
        url = f"{self.base_url}{path}"

        query = dict(params or {})
        if self.config.account_switch_key:
            query["accountSwitchKey"] = self.config.account_switch_key

        request_headers = {
            "Accept": "application/json",
            "X-Request-ID": get_request_id(),
        }
        request_headers.update(headers or {})

        async def _send() -> httpx.Response:
            async with httpx.AsyncClient(timeout=self.config.timeout, auth=self.auth) as client:
                return await client.request(
                    method,
                    url,
                    params=query,
                    headers=request_headers,
                    json=json
                )

        send = retry_on_exception((httpx.TransportError,), config=self.retry_config)(_send)

        start_time = time.monotonic()
        try:
            response = await send()
        except RetryError as e:
            self.metrics.record_transport_error(method, operation)
            self.logger.error(
                "Vendor API request failed",
                method=method,
                url=url,
                operation=operation,
                attempts=e.attempts,
                error=str(e.last_exception)
            )
            raise TransportError(
                f"{operation} request failed: {e.last_exception}",
                details={"method": method, "url": url, "attempts": e.attempts}
            ) from e.last_exception

        duration = time.monotonic() - start_time
        self.metrics.record_request(method, operation, response.status_code, duration)
        self.logger.debug(
            "Vendor API request completed",
            method=method,
            url=url,
            operation=operation,
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
            request_id=request_headers["X-Request-ID"]
        )
        return response


def decode_body(response: httpx.Response, model: Type[ModelT]) -> ModelT:
    """Parse a successful response into ``model``.

    A body that is not valid JSON or does not match the model surfaces as
    an APIError carrying the response status.
    """
    try:
        return model.model_validate(response.json())
    except ValueError as e:
        raise APIError(
            response.status_code,
            Problem(status=response.status_code, title="Invalid response body", detail=str(e)),
            response.text
        ) from e
