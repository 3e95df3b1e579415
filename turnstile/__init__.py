"""
Async client for Cloudflare Turnstile server-side validation.

    >>> async with TurnstileClient(secret) as client:
    ...     result = await client.siteverify(SiteVerifyRequest(response=token))
"""

from .errors import (
    SerializationError,
    SiteVerifyError,
    SiteVerifyErrorCode,
    TransportError,
    TurnstileError,
)
from .infrastructure.captcha.protocol import CaptchaProvider
from .infrastructure.captcha.turnstile import TurnstileClient, TurnstileProvider
from .schemas.dto.requests.siteverify import SiteVerifyRequest
from .schemas.dto.responses.siteverify import SiteVerifyResponse
from .shared.generators import generate_idempotency_key
from .version import __version__

__all__ = [
    "CaptchaProvider",
    "SerializationError",
    "SiteVerifyError",
    "SiteVerifyErrorCode",
    "SiteVerifyRequest",
    "SiteVerifyResponse",
    "TransportError",
    "TurnstileClient",
    "TurnstileError",
    "TurnstileProvider",
    "generate_idempotency_key",
    "__version__",
]
