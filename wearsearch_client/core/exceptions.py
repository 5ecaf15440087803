"""
API error type and helpers that turn transport / HTTP failures into a
human-readable message.
"""

import json
from typing import Any, Optional

import httpx

DEFAULT_ERROR_MESSAGE = "An unexpected error occurred"


class ApiError(Exception):
    """Error raised by every hard-fail call into the marketplace API."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        code: Optional[str] = None,
        error_code: Optional[str] = None,
        url: Optional[str] = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.error_code = error_code
        self.url = url
        # Parsed response body for callers that read backend-specific fields
        self.body = body

    def __str__(self) -> str:
        return self.message

    def is_auth_error(self) -> bool:
        return self.status in (401, 403)

    def is_not_found(self) -> bool:
        return self.status == 404

    def is_server_error(self) -> bool:
        return self.status is not None and self.status >= 500

    def is_network_error(self) -> bool:
        return self.status is None and self.code == "ERR_NETWORK"

    @property
    def user_message(self) -> str:
        if self.is_network_error():
            return "Network error. Please check your internet connection."
        if self.is_server_error():
            return "Server error. Please try again later."
        return self.message or DEFAULT_ERROR_MESSAGE

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "status": self.status,
            "code": self.code,
            "error_code": self.error_code,
        }


def _string_at(value: Any, key: str) -> Optional[str]:
    if not isinstance(value, dict):
        return None
    nested = value.get(key)
    return nested if isinstance(nested, str) else None


def _response_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def message_from_body(body: Any) -> Optional[str]:
    """
    Pull a message out of an error body.

    Order: ``message``, then ``error`` as a string, then ``error.message``
    for the v1 ``{"error": {"code", "message"}}`` envelope.
    """
    message = _string_at(body, "message")
    if message:
        return message
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, str) and error:
        return error
    nested = _string_at(error, "message")
    if nested:
        return nested
    return None


def error_code_from_body(body: Any) -> Optional[str]:
    error = body.get("error") if isinstance(body, dict) else None
    return (
        _string_at(error, "i18n_key")
        or _string_at(error, "code")
        or _string_at(body, "error_code")
        or _string_at(body, "code")
    )


def handle_api_error(error: BaseException) -> ApiError:
    """Convert any exception raised around an HTTP call into an ApiError."""
    if isinstance(error, ApiError):
        return error

    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        body = _response_body(response)
        status = response.status_code
        message = message_from_body(body) or str(error) or DEFAULT_ERROR_MESSAGE
        code = "ERR_BAD_RESPONSE" if status >= 500 else "ERR_BAD_REQUEST"
        return ApiError(
            message,
            status=status,
            code=code,
            error_code=error_code_from_body(body),
            url=str(error.request.url),
            body=body,
        )

    if isinstance(error, httpx.TimeoutException):
        return ApiError(str(error) or "Request timed out", code="ECONNABORTED")

    if isinstance(error, httpx.TransportError):
        return ApiError(str(error) or "Network Error", code="ERR_NETWORK")

    if isinstance(error, Exception) and str(error):
        return ApiError(str(error))

    return ApiError(DEFAULT_ERROR_MESSAGE)


def is_route_not_found(body: Any) -> bool:
    """True for the "route not found" 404 bodies of both API generations."""
    if not isinstance(body, dict):
        return False
    error = body.get("error")
    v1_message = _string_at(error, "message")
    if v1_message and "route not found" in v1_message.lower():
        return True
    v1_code = _string_at(error, "code")
    if v1_code and "route" in v1_code.lower():
        return True
    message = _string_at(body, "message")
    if message and "route not found" in message.lower():
        return True
    return isinstance(error, str) and "route not found" in error.lower()


def backend_error_detail(error: ApiError) -> Optional[str]:
    """The plain ``error`` string of a legacy error body, when there is one."""
    detail = error.body.get("error") if isinstance(error.body, dict) else None
    return detail if isinstance(detail, str) and detail else None
