"""
Turnstile error hierarchy.

TurnstileError is the base for all typed errors raised by the client. The
three concrete kinds never overlap:

- TransportError      — the HTTP exchange itself failed (connect, TLS, timeout)
- SerializationError  — a body could not be encoded/decoded as the expected JSON
- SiteVerifyError     — the service answered with a non-empty ``error-codes`` list

Error codes: https://developers.cloudflare.com/turnstile/get-started/server-side-validation/#error-codes
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class SiteVerifyErrorCode(str, Enum):
    """Wire-level error codes returned by the siteverify endpoint."""

    MISSING_INPUT_SECRET = "missing-input-secret"
    INVALID_INPUT_SECRET = "invalid-input-secret"
    MISSING_INPUT_RESPONSE = "missing-input-response"
    INVALID_INPUT_RESPONSE = "invalid-input-response"
    INVALID_WIDGET_ID = "invalid-widget-id"
    INVALID_PARSED_SECRET = "invalid-parsed-secret"
    BAD_REQUEST = "bad-request"
    TIMEOUT_OR_DUPLICATE = "timeout-or-duplicate"
    INTERNAL_ERROR = "internal-error"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    SiteVerifyErrorCode.MISSING_INPUT_SECRET: "The secret parameter was not passed.",
    SiteVerifyErrorCode.INVALID_INPUT_SECRET: (
        "The secret parameter was invalid or did not exist."
    ),
    SiteVerifyErrorCode.MISSING_INPUT_RESPONSE: "The response parameter was not passed.",
    SiteVerifyErrorCode.INVALID_INPUT_RESPONSE: (
        "The response parameter is invalid or has expired."
    ),
    SiteVerifyErrorCode.INVALID_WIDGET_ID: (
        "The widget ID extracted from the parsed site secret key was invalid "
        "or did not exist."
    ),
    SiteVerifyErrorCode.INVALID_PARSED_SECRET: (
        "The secret extracted from the parsed site secret key was invalid."
    ),
    SiteVerifyErrorCode.BAD_REQUEST: (
        "The request was rejected because it was malformed."
    ),
    SiteVerifyErrorCode.TIMEOUT_OR_DUPLICATE: (
        "The response parameter has already been validated before."
    ),
    SiteVerifyErrorCode.INTERNAL_ERROR: (
        "An internal error happened while validating the response. "
        "The request can be retried."
    ),
}


class TurnstileError(Exception):
    """Base Turnstile error. All typed errors inherit from this."""

    status_code: int = 500
    error_code: str = "turnstile_error"

    def __init__(self, message: str, *, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        payload: dict = {"error": self.message, "code": self.error_code}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class TransportError(TurnstileError):
    """Network, TLS or timeout failure talking to the siteverify endpoint."""

    status_code = 502
    error_code = "transport_error"


class SerializationError(TurnstileError):
    """Request or response body did not match the expected JSON contract."""

    status_code = 502
    error_code = "serialization_error"


class SiteVerifyError(TurnstileError):
    """The service rejected the token; ``error_codes`` keeps the wire order."""

    status_code = 403
    error_code = "siteverify_error"

    def __init__(self, error_codes: list[SiteVerifyErrorCode]) -> None:
        self.error_codes = list(error_codes)
        super().__init__(
            "Turnstile API error: " + ", ".join(c.value for c in self.error_codes),
            details=[c.value for c in self.error_codes],
        )

    @property
    def retryable(self) -> bool:
        return SiteVerifyErrorCode.INTERNAL_ERROR in self.error_codes
