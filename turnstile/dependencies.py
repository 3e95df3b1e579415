"""
FastAPI integration helpers.

get_client_ip()           — resolve the visitor IP to send as ``remote_ip``
register_error_handlers() — map TurnstileError subclasses to JSON responses

Requires the ``fastapi`` extra.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from turnstile.errors import TurnstileError

# Checked in priority order before falling back to the socket peer
_CLIENT_IP_HEADERS: list[str] = [
    "CF-Connecting-IP",
    "True-Client-IP",
    "X-Forwarded-For",
    "X-Real-IP",
    "X-Client-IP",
]


def get_client_ip(request: Request) -> str:
    """Extract the real client IP from a FastAPI ``Request``.

    ``CF-Connecting-IP`` wins since Turnstile sites normally sit behind
    Cloudflare. For ``X-Forwarded-For`` only the first hop is used.

    Returns:
        The resolved client IP string, or ``""`` if none can be found.
    """
    for header in _CLIENT_IP_HEADERS:
        ip_value: str | None = request.headers.get(header)
        if ip_value:
            client_ip: str = ip_value.split(",")[0].strip()
            if client_ip:
                return client_ip

    return request.client.host if request.client else ""


def register_error_handlers(app: FastAPI) -> None:
    """Register a TurnstileError exception handler on the FastAPI app."""

    @app.exception_handler(TurnstileError)
    async def turnstile_error_handler(
        request: Request, exc: TurnstileError
    ) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
