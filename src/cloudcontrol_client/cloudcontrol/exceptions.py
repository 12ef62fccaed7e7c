"""Exceptions raised by the CloudControl client.

Catch ``CloudControlError`` to handle every failure reported by the client
itself. Transport failures (``httpx.HTTPError``) and body validation
failures (``pydantic.ValidationError``) are not wrapped.
"""

import httpx
import pydantic

from .types import ApiResponseCodeV2, ApiResponseV2


class CloudControlError(Exception):
    """Base exception for CloudControl client errors."""


class ClientDisposedError(CloudControlError):
    """Raised when an operation is attempted on a closed client."""

    def __init__(self, client_name: str = "CloudControlClient"):
        super().__init__(f"Cannot use {client_name}, as it has been closed.")


class CloudControlApiError(CloudControlError):
    """The CloudControl API rejected a request.

    Carries the API-level response code, which is distinct from the HTTP
    status code.
    """

    def __init__(
        self,
        message: str,
        response_code: ApiResponseCodeV2,
        status_code: int,
        request_id: str = "",
        operation: str = "",
    ):
        super().__init__(message, response_code, status_code, request_id, operation)
        self.message = message
        self.response_code = response_code
        self.status_code = status_code
        self.request_id = request_id
        self.operation = operation

    def __str__(self) -> str:
        return (
            f"{self.message} "
            f"(response code {self.response_code.value}, HTTP {self.status_code})"
        )

    @classmethod
    def from_api_response(
        cls,
        api_response: ApiResponseV2,
        status_code: int,
    ) -> "CloudControlApiError":
        """Create an exception from a parsed response envelope."""
        return cls(
            message=api_response.message,
            response_code=api_response.response_code,
            status_code=status_code,
            request_id=api_response.request_id,
            operation=api_response.operation,
        )

    @classmethod
    def from_response(cls, response: httpx.Response) -> "CloudControlApiError":
        """Create an exception from an unsuccessful HTTP response.

        The body is parsed as a response envelope when possible; otherwise
        an ``UNKNOWN`` error is synthesized from the status line.
        """
        try:
            api_response = ApiResponseV2.model_validate_json(response.content)
        except pydantic.ValidationError:
            api_response = ApiResponseV2(
                response_code=ApiResponseCodeV2.UNKNOWN,
                message=(
                    f"The request failed with HTTP {response.status_code} "
                    f"{response.reason_phrase}"
                ).rstrip(),
            )
        return cls.from_api_response(api_response, response.status_code)
