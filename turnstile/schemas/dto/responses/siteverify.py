"""
Response DTOs for the siteverify endpoint.

RawSiteVerifyResponse — the body exactly as the service sends it
SiteVerifyResponse    — normalized success record handed to callers

The raw ``success`` flag is carried through but never decides the outcome;
the ``error-codes`` list does.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from turnstile.errors import SiteVerifyErrorCode


class RawSiteVerifyResponse(BaseModel):
    """Wire shape of a siteverify response. Unknown keys are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    success: bool
    challenge_ts: Optional[str] = None
    hostname: Optional[str] = None
    error_codes: list[SiteVerifyErrorCode] = Field(alias="error-codes")
    action: Optional[str] = None
    cdata: Optional[str] = None


class SiteVerifyResponse(BaseModel):
    """A verified token.

    ``timestamp`` is the ISO 8601 time the challenge was solved,
    ``client_data`` the ``cdata`` value the widget was rendered with.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    timestamp: str
    hostname: str
    action: str
    client_data: str

    @classmethod
    def from_raw(cls, raw: RawSiteVerifyResponse) -> "SiteVerifyResponse":
        return cls(
            success=raw.success,
            timestamp=raw.challenge_ts or "",
            hostname=raw.hostname or "",
            action=raw.action or "",
            client_data=raw.cdata or "",
        )
