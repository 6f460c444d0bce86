"""
Unit tests for shared errors, retry and configuration.
"""

from unittest.mock import AsyncMock

import httpx
import pytest

from shared.config import Settings, get_config
from shared.errors import APIError, ValidationError
from shared.retry import RetryConfig, RetryError, calculate_delay, retry_on_exception


def response(status_code, content, content_type="application/json"):
    return httpx.Response(
        status_code=status_code,
        content=content,
        headers={"Content-Type": content_type},
        request=httpx.Request("GET", "https://akab-test.luna.akamaiapis.net/papi/v1/groups")
    )


class TestAPIError:
    """Test cases for APIError.from_response."""

    def test_problem_body_is_parsed(self):
        error = APIError.from_response(response(
            409,
            b'{"type": "https://problems.example.net/papi/v0/etag-mismatch", '
            b'"title": "Conflict", "detail": "Etag does not match", "status": 409, '
            b'"instance": "https://example/papi/v1/properties/prp_1", "errors": [{"title": "x"}]}'
        ))

        assert error.status_code == 409
        assert error.problem.title == "Conflict"
        assert error.problem.errors == [{"title": "x"}]
        assert str(error) == "Conflict (status 409): Etag does not match"
        assert error.details["status_code"] == 409

    def test_non_json_body_kept_as_detail(self):
        error = APIError.from_response(response(502, b"Bad Gateway", "text/plain"))

        assert error.status_code == 502
        assert error.problem.status == 502
        assert error.problem.detail == "Bad Gateway"
        assert error.body == "Bad Gateway"

    def test_empty_body(self):
        error = APIError.from_response(response(503, b""))

        assert error.problem.status == 503
        assert error.problem.title is None
        assert str(error) == "API error (status 503)"

    def test_unexpected_json_shape(self):
        error = APIError.from_response(response(500, b'{"status": "broken"}'))

        assert error.problem.detail == '{"status": "broken"}'


class TestValidationError:

    def test_message_lists_every_path(self):
        error = ValidationError({"propertyId": "PropertyID required", "rules.name": "Name required"})

        assert error.code == "VALIDATION_ERROR"
        assert str(error) == "Validation failed: propertyId: PropertyID required; rules.name: Name required"
        assert error.details == {"errors": error.errors}


class TestRetry:
    """Test cases for retry_on_exception."""

    @pytest.mark.asyncio
    async def test_returns_after_transient_failure(self):
        func = AsyncMock(side_effect=[httpx.ConnectError("refused"), "ok"])
        func.__name__ = "fetch"

        wrapped = retry_on_exception((httpx.TransportError,), RetryConfig(max_attempts=2, base_delay=0.0))(func)

        assert await wrapped() == "ok"
        assert func.call_count == 2

    @pytest.mark.asyncio
    async def test_other_exceptions_are_not_retried(self):
        func = AsyncMock(side_effect=KeyError("boom"))
        func.__name__ = "fetch"

        wrapped = retry_on_exception((httpx.TransportError,), RetryConfig(max_attempts=3, base_delay=0.0))(func)

        with pytest.raises(KeyError):
            await wrapped()
        assert func.call_count == 1

    @pytest.mark.asyncio
    async def test_exhaustion_raises_retry_error(self):
        func = AsyncMock(side_effect=httpx.ConnectError("refused"))
        func.__name__ = "fetch"

        wrapped = retry_on_exception((httpx.TransportError,), RetryConfig(max_attempts=2, base_delay=0.0))(func)

        with pytest.raises(RetryError) as exc_info:
            await wrapped()
        assert exc_info.value.attempts == 2
        assert isinstance(exc_info.value.last_exception, httpx.ConnectError)

    def test_delay_is_exponential_and_capped(self):
        config = RetryConfig(base_delay=1.0, max_delay=5.0, exponential_base=2.0, jitter=False)

        assert [calculate_delay(attempt, config) for attempt in range(1, 5)] == [1.0, 2.0, 4.0, 5.0]

    def test_jitter_stays_within_ten_percent(self):
        config = RetryConfig(base_delay=2.0, max_delay=10.0, jitter=True)

        for _ in range(50):
            assert 1.8 <= calculate_delay(1, config) <= 2.2


class TestConfig:

    def test_defaults(self):
        config = Settings(_env_file=None)

        assert config.use_prefixes is False
        assert config.exempt_container_rules is False
        assert config.retry_max_attempts == 3

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("EDGE_BASE_URL", "https://akab-test.luna.akamaiapis.net")
        monkeypatch.setenv("EDGE_USE_PREFIXES", "true")
        monkeypatch.setenv("EDGE_EXEMPT_CONTAINER_RULES", "1")

        config = get_config()

        assert config.base_url == "https://akab-test.luna.akamaiapis.net"
        assert config.use_prefixes is True
        assert config.exempt_container_rules is True

    def test_keyword_overrides_win(self, monkeypatch):
        monkeypatch.setenv("EDGE_TIMEOUT", "30")

        assert get_config(timeout=2.5).timeout == 2.5
