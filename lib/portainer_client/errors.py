from __future__ import annotations

TIMEOUT = "TIMEOUT"
CONNECTION_ERROR = "CONNECTION_ERROR"
WRITE_DISABLED = "WRITE_DISABLED"
NOT_FOUND = "NOT_FOUND"
INVALID_RESPONSE = "INVALID_RESPONSE"
INVALID_ARGUMENT = "INVALID_ARGUMENT"
PULL_FAILED = "PULL_FAILED"


def http_code(status_code: int) -> str:
    return f"HTTP_{status_code}"


class PortainerClientError(Exception):
    """Base client error: a stable machine-readable code plus a readable message."""

    def __init__(
            self,
            message: str,
            code: str,
            status_code: int | None = None,
            details: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ApiError(PortainerClientError):
    def __init__(self, status_code: int, message: str, details: str | None = None):
        super().__init__(message, http_code(status_code), status_code, details)


class AuthError(ApiError):
    """Auth-related API error (401/403)."""


class NetworkError(PortainerClientError):
    """Transport/network layer error."""

    def __init__(self, message: str):
        super().__init__(message, CONNECTION_ERROR)


class RequestTimeout(PortainerClientError):
    def __init__(self, timeout_s: float):
        super().__init__(f"Request timeout after {timeout_s:g}s", TIMEOUT)
        self.timeout_s = timeout_s


class WriteDisabledError(PortainerClientError):
    def __init__(self):
        super().__init__(
            "Write operations disabled. Set PORTAINER_WRITE_ENABLED=true to enable.",
            WRITE_DISABLED,
        )


class NotFoundError(PortainerClientError):
    def __init__(self, message: str):
        super().__init__(message, NOT_FOUND, 404)


class InvalidResponseError(PortainerClientError):
    """Successful status, but the body could not be decoded."""

    def __init__(self, status_code: int, message: str, details: str | None = None):
        super().__init__(message, INVALID_RESPONSE, status_code, details)
