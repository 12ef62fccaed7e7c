"""CloudControl API client package.

Provides an asynchronous HTTP client for the CloudControl API that returns
validated API types and maps API error responses to typed exceptions.

Exports:
    CloudControlClient: HTTP client with authentication and account caching.
    CloudControlError: Base exception for client errors.
    CloudControlApiError: Raised when the API rejects a request.
    ClientDisposedError: Raised when a closed client is used.
    types: Module containing Pydantic models for API bodies.
    DEFAULT_TIMEOUT: Default HTTP request timeout.
"""

from . import types
from .client import DEFAULT_TIMEOUT, CloudControlClient
from .exceptions import ClientDisposedError, CloudControlApiError, CloudControlError

__all__ = [
    "DEFAULT_TIMEOUT",
    "ClientDisposedError",
    "CloudControlApiError",
    "CloudControlClient",
    "CloudControlError",
    "types",
]
