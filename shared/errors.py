"""
Shared error handling for the edge configuration API client.
"""

from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError


class Problem(BaseModel):
    """Problem-details body returned by the vendor APIs on failure."""

    model_config = ConfigDict(extra="allow")

    type: Optional[str] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    instance: Optional[str] = None
    status: Optional[int] = None
    errors: List[Dict[str, Any]] = []


class ClientException(Exception):
    """Base exception for the API client."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(ClientException):
    """Request or rule tree failed local validation."""

    def __init__(self, errors: Dict[str, str], message: str = "Validation failed"):
        self.errors = dict(errors)
        summary = "; ".join(f"{path}: {reason}" for path, reason in self.errors.items())
        super().__init__(
            "VALIDATION_ERROR",
            f"{message}: {summary}" if summary else message,
            {"errors": self.errors}
        )


class NotFoundError(ClientException):
    """Requested resource does not exist."""

    def __init__(self, resource: str, details: Optional[Dict[str, Any]] = None):
        self.resource = resource
        super().__init__("NOT_FOUND", f"Resource not found: {resource}", details)


class APIError(ClientException):
    """Vendor API answered with an unexpected status."""

    def __init__(self, status_code: int, problem: Problem, body: str = ""):
        self.status_code = status_code
        self.problem = problem
        self.body = body
        title = problem.title or "API error"
        message = f"{title} (status {status_code})"
        if problem.detail:
            message = f"{message}: {problem.detail}"
        super().__init__(
            "API_ERROR",
            message,
            {"status_code": status_code, "problem": problem.model_dump(exclude_none=True)}
        )

    @classmethod
    def from_response(cls, response: httpx.Response) -> "APIError":
        """Build an APIError from a response, tolerating non-JSON bodies."""
        try:
            payload = response.json()
        except ValueError:
            payload = None

        problem = Problem(status=response.status_code)
        if isinstance(payload, dict):
            try:
                problem = Problem.model_validate(payload)
            except PydanticValidationError:
                problem = Problem(status=response.status_code, detail=response.text)
        elif response.text:
            problem = Problem(status=response.status_code, detail=response.text)

        if problem.status is None:
            problem.status = response.status_code
        return cls(response.status_code, problem, response.text)


class TransportError(ClientException):
    """The HTTP exchange itself could not be completed."""

    def __init__(self, message: str = "Request failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("TRANSPORT_ERROR", message, details)
