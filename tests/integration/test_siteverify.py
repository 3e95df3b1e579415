"""Integration tests against the live siteverify endpoint.

Uses Cloudflare's testing secrets, which behave deterministically for any
response token. Opt in with TURNSTILE_INTEGRATION=1.

https://developers.cloudflare.com/turnstile/troubleshooting/testing/
"""

import os

import pytest

from turnstile import (
    SiteVerifyError,
    SiteVerifyErrorCode,
    SiteVerifyRequest,
    TurnstileClient,
    generate_idempotency_key,
)

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        os.getenv("TURNSTILE_INTEGRATION") != "1",
        reason="set TURNSTILE_INTEGRATION=1 to hit the live endpoint",
    ),
]


class TestTestingSecrets:
    async def test_success(self):
        async with TurnstileClient("1x0000000000000000000000000000000AA") as client:
            validated = await client.siteverify(SiteVerifyRequest(response="myresponse"))
        assert validated.success is True

    async def test_fail(self):
        async with TurnstileClient("2x0000000000000000000000000000000AA") as client:
            with pytest.raises(SiteVerifyError):
                await client.siteverify(SiteVerifyRequest(response="myresponse"))

    async def test_token_already_spent(self):
        async with TurnstileClient("3x0000000000000000000000000000000AA") as client:
            with pytest.raises(SiteVerifyError) as exc_info:
                await client.siteverify(SiteVerifyRequest(response="myresponse"))
        assert exc_info.value.error_codes[0] is SiteVerifyErrorCode.TIMEOUT_OR_DUPLICATE

    async def test_native_tls_backend(self):
        async with TurnstileClient(
            "1x0000000000000000000000000000000AA", tls_backend="native"
        ) as client:
            validated = await client.siteverify(SiteVerifyRequest(response="myresponse"))
        assert validated.success is True


@pytest.mark.skipif(
    not all(
        os.getenv(var)
        for var in ("TURNSTILE_SECRET_KEY", "TURNSTILE_RESPONSE", "TURNSTILE_HOSTNAME")
    ),
    reason="needs TURNSTILE_SECRET_KEY, TURNSTILE_RESPONSE and TURNSTILE_HOSTNAME",
)
async def test_real_token():
    async with TurnstileClient(os.environ["TURNSTILE_SECRET_KEY"]) as client:
        validated = await client.siteverify(
            SiteVerifyRequest(
                response=os.environ["TURNSTILE_RESPONSE"],
                idempotency_key=generate_idempotency_key(),
            )
        )
    assert validated.success is True
    assert validated.hostname == os.environ["TURNSTILE_HOSTNAME"]
