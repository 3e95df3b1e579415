"""
Request DTO for the siteverify endpoint.

SiteVerifyRequest — POST /turnstile/v0/siteverify

Accepted parameters:
https://developers.cloudflare.com/turnstile/get-started/server-side-validation/#accepted-parameters
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, SecretStr, field_serializer


class SiteVerifyRequest(BaseModel):
    """Request body for a single token verification.

    ``secret`` is optional here; the client fills in its own credential when
    it is left unset. It is masked in ``repr()`` and only exposed when the
    model is dumped in JSON mode for the wire.
    """

    model_config = ConfigDict(populate_by_name=True)

    response: str
    secret: Optional[SecretStr] = None
    remote_ip: Optional[str] = None
    idempotency_key: Optional[UUID] = None

    @field_serializer("secret", when_used="json-unless-none")
    def _expose_secret(self, value: SecretStr) -> str:
        return value.get_secret_value()

    def to_wire(self) -> dict:
        """JSON-ready body; unset optional fields are left out entirely."""
        return self.model_dump(mode="json", exclude_none=True)
