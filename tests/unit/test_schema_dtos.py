"""Unit tests for the siteverify request/response DTOs."""

import json
import uuid

import pytest
from pydantic import SecretStr, ValidationError

from turnstile.errors import SiteVerifyErrorCode
from turnstile.schemas.dto.requests.siteverify import SiteVerifyRequest
from turnstile.schemas.dto.responses.siteverify import (
    RawSiteVerifyResponse,
    SiteVerifyResponse,
)


# ── SiteVerifyRequest ─────────────────────────────────────────────────────────


class TestSiteVerifyRequest:
    def test_response_required(self):
        with pytest.raises(ValidationError):
            SiteVerifyRequest()

    def test_unset_optionals_absent_from_wire(self):
        assert SiteVerifyRequest(response="tok").to_wire() == {"response": "tok"}

    def test_secret_exposed_only_on_wire(self):
        req = SiteVerifyRequest(response="tok", secret="s3cr3t")
        assert isinstance(req.secret, SecretStr)
        assert "s3cr3t" not in repr(req)
        assert req.to_wire()["secret"] == "s3cr3t"

    def test_secret_masked_in_python_dump(self):
        req = SiteVerifyRequest(response="tok", secret="s3cr3t")
        assert "s3cr3t" not in str(req.model_dump())

    def test_idempotency_key_serialised_as_string(self):
        key = uuid.UUID("6f1c1d8e-6bd4-4c71-9a52-0b6b0d1b3f0e")
        req = SiteVerifyRequest(response="tok", idempotency_key=key)
        assert req.to_wire()["idempotency_key"] == str(key)

    def test_remote_ip_wire_name(self):
        req = SiteVerifyRequest(response="tok", remote_ip="203.0.113.7")
        assert req.to_wire()["remote_ip"] == "203.0.113.7"

    def test_decoding_encoded_request_preserves_fields(self):
        key = uuid.uuid4()
        req = SiteVerifyRequest(
            response="tok", secret="s", remote_ip="198.51.100.1", idempotency_key=key
        )
        decoded = SiteVerifyRequest.model_validate(json.loads(json.dumps(req.to_wire())))
        assert decoded.response == "tok"
        assert decoded.secret.get_secret_value() == "s"
        assert decoded.remote_ip == "198.51.100.1"
        assert decoded.idempotency_key == key


# ── RawSiteVerifyResponse ─────────────────────────────────────────────────────


class TestRawSiteVerifyResponse:
    def test_parses_full_body(self):
        raw = RawSiteVerifyResponse.model_validate_json(
            json.dumps(
                {
                    "success": True,
                    "challenge_ts": "2022-02-28T15:14:30.096Z",
                    "hostname": "example.com",
                    "error-codes": [],
                    "action": "login",
                    "cdata": "sessionid-123456789",
                }
            )
        )
        assert raw.success is True
        assert raw.error_codes == []
        assert raw.cdata == "sessionid-123456789"

    def test_error_codes_parsed_in_order(self):
        raw = RawSiteVerifyResponse.model_validate(
            {"success": False, "error-codes": ["bad-request", "internal-error"]}
        )
        assert raw.error_codes == [
            SiteVerifyErrorCode.BAD_REQUEST,
            SiteVerifyErrorCode.INTERNAL_ERROR,
        ]

    def test_extra_keys_ignored(self):
        raw = RawSiteVerifyResponse.model_validate(
            {"success": True, "error-codes": [], "metadata": {"ephemeral_id": "x"}}
        )
        assert raw.success is True

    def test_missing_error_codes_rejected(self):
        with pytest.raises(ValidationError):
            RawSiteVerifyResponse.model_validate({"success": True})

    def test_unknown_error_code_rejected(self):
        with pytest.raises(ValidationError):
            RawSiteVerifyResponse.model_validate(
                {"success": False, "error-codes": ["brand-new-code"]}
            )

    def test_invalid_json_rejected(self):
        with pytest.raises(ValidationError):
            RawSiteVerifyResponse.model_validate_json(b"<html>502</html>")


# ── SiteVerifyResponse ────────────────────────────────────────────────────────


class TestSiteVerifyResponse:
    def test_from_raw_copies_wire_fields(self):
        raw = RawSiteVerifyResponse.model_validate(
            {
                "success": True,
                "challenge_ts": "2022-02-28T15:14:30.096Z",
                "hostname": "example.com",
                "error-codes": [],
                "action": "login",
                "cdata": "abc",
            }
        )
        result = SiteVerifyResponse.from_raw(raw)
        assert result == SiteVerifyResponse(
            success=True,
            timestamp="2022-02-28T15:14:30.096Z",
            hostname="example.com",
            action="login",
            client_data="abc",
        )

    def test_from_raw_defaults_missing_to_empty(self):
        raw = RawSiteVerifyResponse.model_validate({"success": True, "error-codes": []})
        result = SiteVerifyResponse.from_raw(raw)
        assert result.timestamp == ""
        assert result.hostname == ""
        assert result.action == ""
        assert result.client_data == ""

    def test_from_raw_keeps_success_flag_as_sent(self):
        raw = RawSiteVerifyResponse.model_validate({"success": False, "error-codes": []})
        assert SiteVerifyResponse.from_raw(raw).success is False
