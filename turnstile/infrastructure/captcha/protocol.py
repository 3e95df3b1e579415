"""CaptchaProvider protocol — services depend on this, not the concrete implementation."""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class CaptchaProvider(Protocol):
    async def verify(self, token: str, remote_ip: Optional[str] = None) -> bool: ...
