"""Cloudflare Turnstile siteverify client and CaptchaProvider implementation.

TurnstileClient   — typed siteverify call; raises TurnstileError subclasses
TurnstileProvider — pass/fail gate over a TurnstileClient (fails closed)

Testing secrets: https://developers.cloudflare.com/turnstile/troubleshooting/testing/
"""

from __future__ import annotations

from typing import Any, Optional, Union

import httpx
from pydantic import SecretStr, ValidationError
from pydantic_core import PydanticSerializationError

from turnstile.config import TurnstileSettings
from turnstile.errors import (
    SerializationError,
    SiteVerifyError,
    TransportError,
    TurnstileError,
)
from turnstile.infrastructure.http_client import HttpClient, TLSBackend
from turnstile.schemas.dto.requests.siteverify import SiteVerifyRequest
from turnstile.schemas.dto.responses.siteverify import (
    RawSiteVerifyResponse,
    SiteVerifyResponse,
)
from turnstile.shared.generators import generate_idempotency_key
from turnstile.shared.logging import get_logger, hash_ip
from turnstile.version import __homepage__, __version__

log = get_logger(__name__)

SITEVERIFY_URL = "https://challenges.cloudflare.com/turnstile/v0/siteverify"
USER_AGENT = f"cf-turnstile ({__homepage__}, {__version__})"


class TurnstileClient:
    """Async client for the Turnstile siteverify endpoint.

    Holds the site secret and one long-lived HTTP client. Safe to share
    between concurrent tasks: neither is mutated after construction.

    An ``http_client`` passed in is borrowed and left open by ``aclose()``;
    otherwise the client builds (and owns) one from ``timeout``,
    ``tls_backend`` and ``transport``. Passing any of those together with
    ``http_client`` raises ``ValueError``.
    """

    def __init__(
        self,
        secret: Union[SecretStr, str],
        http_client: Optional[HttpClient] = None,
        *,
        timeout: Optional[float] = None,
        tls_backend: Optional[TLSBackend] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        idempotency: bool = False,
    ) -> None:
        transport_options = (timeout, tls_backend, transport)
        if http_client is not None and any(o is not None for o in transport_options):
            raise ValueError(
                "timeout, tls_backend and transport configure a client-owned "
                "HttpClient; set them on the http_client passed in instead"
            )

        self._secret = secret if isinstance(secret, SecretStr) else SecretStr(secret)
        self._owns_http = http_client is None
        self._http = http_client or HttpClient(
            10.0 if timeout is None else timeout,
            tls_backend=tls_backend or "bundled",
            transport=transport,
        )
        self._idempotency = idempotency

    @classmethod
    def from_settings(
        cls,
        settings: TurnstileSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "TurnstileClient":
        return cls(
            settings.turnstile_secret_key,
            timeout=settings.turnstile_timeout_seconds,
            tls_backend=settings.turnstile_tls_backend,
            transport=transport,
            idempotency=settings.turnstile_idempotency,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self._secret.get_secret_value())

    def __repr__(self) -> str:
        return f"TurnstileClient(secret={self._secret!r}, idempotency={self._idempotency})"

    async def siteverify(self, request: SiteVerifyRequest) -> SiteVerifyResponse:
        """Verify a Turnstile response token.

        Raises:
            TransportError: the HTTP exchange failed.
            SerializationError: the request could not be encoded or the
                response body is not the expected JSON shape.
            SiteVerifyError: the service returned a non-empty ``error-codes``
                list, regardless of its ``success`` flag.
        """
        request = self._prepare(request)

        try:
            payload = request.to_wire()
        except PydanticSerializationError as exc:
            raise SerializationError("Could not encode siteverify request") from exc

        log.debug(
            "turnstile_siteverify_request",
            remote_ip=hash_ip(request.remote_ip),
            idempotent=request.idempotency_key is not None,
        )

        try:
            response = await self._http.post(
                SITEVERIFY_URL,
                json=payload,
                headers={
                    "User-Agent": USER_AGENT,
                    "Content-Type": "application/json",
                },
            )
        except httpx.HTTPError as exc:
            log.error(
                "turnstile_transport_error",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise TransportError(f"siteverify request failed: {exc}") from exc

        try:
            raw = RawSiteVerifyResponse.model_validate_json(response.content)
        except ValidationError as exc:
            log.error(
                "turnstile_response_invalid",
                status_code=response.status_code,
                error_count=exc.error_count(),
            )
            raise SerializationError(
                "Unexpected siteverify response body",
                details={"status_code": response.status_code},
            ) from exc

        if raw.error_codes:
            log.warning(
                "turnstile_siteverify_failed",
                error_codes=[code.value for code in raw.error_codes],
                remote_ip=hash_ip(request.remote_ip),
            )
            raise SiteVerifyError(raw.error_codes)

        result = SiteVerifyResponse.from_raw(raw)
        log.debug(
            "turnstile_siteverify_ok",
            success=result.success,
            hostname=result.hostname,
            action=result.action,
        )
        return result

    def _prepare(self, request: SiteVerifyRequest) -> SiteVerifyRequest:
        # model_copy leaves the caller's request and our secret untouched
        updates: dict[str, Any] = {}
        if request.secret is None:
            updates["secret"] = self._secret
        if self._idempotency and request.idempotency_key is None:
            updates["idempotency_key"] = generate_idempotency_key()
        if not updates:
            return request
        return request.model_copy(update=updates)

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "TurnstileClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()


class TurnstileProvider:
    """CaptchaProvider backed by Turnstile.

    Collapses the typed outcome into a boolean for callers that only gate a
    form submission. Any TurnstileError is logged and treated as a failure.
    """

    def __init__(self, client: TurnstileClient) -> None:
        self._client = client

    async def verify(self, token: str, remote_ip: Optional[str] = None) -> bool:
        if not self._client.is_configured:
            log.warning("turnstile_secret_not_configured")
            return False
        try:
            result = await self._client.siteverify(
                SiteVerifyRequest(response=token, remote_ip=remote_ip)
            )
        except SiteVerifyError as e:
            log.info(
                "turnstile_token_rejected",
                error_codes=[code.value for code in e.error_codes],
                retryable=e.retryable,
            )
            return False
        except TurnstileError as e:
            log.error(
                "turnstile_verification_unavailable",
                error=e.message,
                error_type=type(e).__name__,
            )
            return False
        return result.success
