"""
Tests for app.services.gateway.errors
"""

import httpx
import pytest
from google.genai import errors as genai_errors

from app.core.exceptions import CredentialError, EmptyResponseError, ParseError, ProviderError
from app.services.gateway import classify_provider_error, error_from_message


def _status_error(code):
    request = httpx.Request("GET", "https://files.example/video.mp4")
    response = httpx.Response(code, request=request)
    return httpx.HTTPStatusError(f"HTTP {code}", request=request, response=response)


class TestErrorFromMessage:

    @pytest.mark.parametrize("message", [
        "Requested entity was not found.",
        "API key not valid. Please pass a valid API key.",
        "reason: API_KEY_INVALID",
    ])
    def test_credential_messages(self, message):
        assert isinstance(error_from_message(message), CredentialError)

    def test_other_message_keeps_wording(self):
        error = error_from_message("Resource has been exhausted")
        assert type(error) is ProviderError
        assert str(error) == "Resource has been exhausted"

    def test_empty_message_uses_default(self):
        assert str(error_from_message(None)) == ProviderError.default_message


class TestClassifyProviderError:

    def test_generation_errors_pass_through(self):
        original = ParseError("bad shape")
        assert classify_provider_error(original) is original
        empty = EmptyResponseError()
        assert classify_provider_error(empty) is empty

    def test_api_error_not_found(self):
        exc = genai_errors.APIError(
            404, {"error": {"code": 404, "message": "Requested entity was not found.", "status": "NOT_FOUND"}}
        )
        result = classify_provider_error(exc)
        assert isinstance(result, CredentialError)
        assert str(result) == CredentialError.default_message

    def test_api_error_permission_denied(self):
        exc = genai_errors.APIError(
            403, {"error": {"code": 403, "message": "Forbidden", "status": "PERMISSION_DENIED"}}
        )
        assert isinstance(classify_provider_error(exc), CredentialError)

    def test_api_error_rate_limited(self):
        exc = genai_errors.APIError(
            429, {"error": {"code": 429, "message": "Quota exceeded", "status": "RESOURCE_EXHAUSTED"}}
        )
        result = classify_provider_error(exc)
        assert type(result) is ProviderError
        assert str(result) == "Quota exceeded"

    @pytest.mark.parametrize("code", [401, 403])
    def test_http_auth_failures(self, code):
        assert isinstance(classify_provider_error(_status_error(code)), CredentialError)

    def test_http_server_error(self):
        result = classify_provider_error(_status_error(503))
        assert type(result) is ProviderError
        assert "503" in str(result)

    def test_transport_error(self):
        exc = httpx.ConnectError("connection refused", request=httpx.Request("GET", "https://x"))
        assert type(classify_provider_error(exc)) is ProviderError

    def test_unknown_exception(self):
        result = classify_provider_error(RuntimeError("socket closed"))
        assert type(result) is ProviderError
        assert str(result) == "socket closed"
