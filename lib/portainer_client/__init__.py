from .client import PortainerClient
from .errors import (
    ApiError,
    AuthError,
    NetworkError,
    NotFoundError,
    PortainerClientError,
    RequestTimeout,
    WriteDisabledError,
)

__all__ = [
    "PortainerClient",
    "PortainerClientError",
    "ApiError",
    "AuthError",
    "NetworkError",
    "NotFoundError",
    "RequestTimeout",
    "WriteDisabledError",
]
