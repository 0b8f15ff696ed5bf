"""Error taxonomy for request handling and startup."""
from __future__ import annotations

from typing import Dict, Optional


class SpaceAPIError(Exception):
    """Base error rendered as a JSON ``{"error_code", "message"}`` response."""

    status_code = 500
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, headers: Optional[Dict[str, str]] = None) -> None:
        self.message = message
        self.headers = headers or {}
        super().__init__(message)

    def to_response(self) -> Dict[str, str]:
        return {"error_code": self.error_code, "message": self.message}


class ClientInputError(SpaceAPIError):
    status_code = 400
    error_code = "INVALID_JSON"

    def __init__(self, message: str = "Invalid JSON") -> None:
        super().__init__(message)


class AuthenticationError(SpaceAPIError):
    status_code = 401

    def __init__(self, message: str, error_code: str = "AUTH_INVALID") -> None:
        super().__init__(message)
        self.error_code = error_code


class RateLimitedError(SpaceAPIError):
    status_code = 429
    error_code = "RATE_LIMITED"

    def __init__(self, retry_after: int) -> None:
        super().__init__(
            "Too many failed authentication attempts. Please try again later.",
            headers={"Retry-After": str(retry_after)},
        )
        self.retry_after = retry_after


class ConfigurationError(SpaceAPIError):
    status_code = 500
    error_code = "CONFIG_ERROR"

    def __init__(self, message: str = "Server configuration error") -> None:
        super().__init__(message)


class DocumentLoadError(RuntimeError):
    """The status document could not be read at startup. Fatal to the process."""


class UnknownSensorError(SpaceAPIError):
    status_code = 404
    error_code = "UNKNOWN_SENSOR"

    def __init__(self, category: str) -> None:
        super().__init__(f"Unsupported sensor category: {category}")
        self.category = category


class DocumentNotLoadedError(SpaceAPIError):
    status_code = 503
    error_code = "DOCUMENT_NOT_LOADED"

    def __init__(self) -> None:
        super().__init__("Status document not loaded")
