"""Tests for the mrwant exception hierarchy."""

import pytest

from mrwant.config.constants import UNAVAILABLE_MESSAGE
from mrwant.exceptions import (
    ApiAuthenticationError,
    ApiConnectionError,
    ApiError,
    ConfigurationError,
    MalformedResponseError,
    MrWantError,
    ServiceUnavailableError,
    classify_error,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_class",
        [ApiConnectionError, ApiAuthenticationError, MalformedResponseError],
    )
    def test_api_errors_share_base(self, exc_class):
        assert issubclass(exc_class, ApiError)
        assert issubclass(exc_class, MrWantError)

    def test_configuration_error_is_mrwant_error(self):
        assert issubclass(ConfigurationError, MrWantError)

    def test_context_in_message(self):
        error = ApiConnectionError("Gemini unreachable", service="gemini")
        assert str(error) == "Gemini unreachable (service='gemini')"
        assert error.context == {"service": "gemini"}

    def test_message_without_context(self):
        assert str(MrWantError("plain")) == "plain"

    def test_api_errors_carry_only_their_context(self):
        for error in (ApiConnectionError(service="gemini"), ApiAuthenticationError(service="gemini")):
            assert error.context == {"service": "gemini"}
            assert not hasattr(error, "retryable")


class TestServiceUnavailable:
    def test_default_message(self):
        assert ServiceUnavailableError().user_message == UNAVAILABLE_MESSAGE

    def test_context_kept_out_of_user_message(self):
        error = ServiceUnavailableError(reason="cancelled")
        assert error.user_message == UNAVAILABLE_MESSAGE
        assert "cancelled" in str(error)


class TestClassifyError:
    def test_mrwant_error_passes_through(self):
        error = MalformedResponseError()
        assert classify_error(error) is error

    def test_connection_error(self):
        assert isinstance(classify_error(ConnectionError("refused")), ApiConnectionError)

    def test_timeout(self):
        assert isinstance(classify_error(TimeoutError()), ApiConnectionError)

    def test_message_hint_connection(self):
        assert isinstance(classify_error(RuntimeError("Network is unreachable")), ApiConnectionError)

    def test_auth_hint(self):
        result = classify_error(ValueError("API key not valid. Please pass a valid API key."))
        assert isinstance(result, ApiAuthenticationError)

    def test_other_errors_are_generic_api_errors(self):
        result = classify_error(KeyError("candidates"))
        assert type(result) is ApiError
        assert result.context["error_type"] == "KeyError"
