"""Custom exception hierarchy for Mr. Want.

Every failure of the outbound generation call is eventually collapsed into a
single user-visible kind, but the internal types are kept distinct so the log
file says what actually went wrong.

Exception Hierarchy:
    MrWantError (base)
    ├── ConfigurationError - Settings/environment issues
    ├── ApiError - External generation service
    │   ├── ApiConnectionError
    │   ├── ApiAuthenticationError
    │   └── MalformedResponseError
    └── ServiceUnavailableError - The one kind shown to the user

Usage:
    from mrwant.exceptions import ApiConnectionError

    try:
        # streaming call
    except httpx.ConnectError as e:
        raise ApiConnectionError("Gemini unreachable", service="gemini") from e
"""

from typing import Any, Optional

from .config.constants import UNAVAILABLE_MESSAGE


class MrWantError(Exception):
    """Base exception for all Mr. Want errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., model, setting)
    """

    def __init__(
        self,
        message: str,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(MrWantError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)


# =============================================================================
# API Errors
# =============================================================================


class ApiError(MrWantError):
    """Base exception for the external generation service."""

    pass


class ApiConnectionError(ApiError):
    """Failed to reach the generation service."""

    def __init__(
        self,
        message: str = "API connection failed",
        *,
        service: Optional[str] = None,
        **context: Any,
    ) -> None:
        if service:
            context["service"] = service
        super().__init__(message, **context)


class ApiAuthenticationError(ApiError):
    """The API key is missing or was rejected."""

    def __init__(
        self,
        message: str = "API authentication failed",
        *,
        service: Optional[str] = None,
        **context: Any,
    ) -> None:
        if service:
            context["service"] = service
        super().__init__(message, **context)


class MalformedResponseError(ApiError):
    """A streamed chunk could not be turned into text."""

    def __init__(
        self,
        message: str = "Malformed response from generation service",
        *,
        content_type: Optional[str] = None,
        **context: Any,
    ) -> None:
        if content_type:
            context["content_type"] = content_type
        super().__init__(message, **context)


# =============================================================================
# User-facing
# =============================================================================


class ServiceUnavailableError(MrWantError):
    """The only error kind the interface ever displays."""

    def __init__(self, message: str = UNAVAILABLE_MESSAGE, **context: Any) -> None:
        super().__init__(message, **context)

    @property
    def user_message(self) -> str:
        # Context stays in the log, never on screen.
        return self.message


_CONNECTION_HINTS = ("connect", "timeout", "timed out", "network", "unreachable", "dns")
_AUTH_HINTS = ("api key", "api_key", "permission", "unauthenticated", "401", "403")


def classify_error(exc: BaseException) -> MrWantError:
    """Map an arbitrary exception from the generation call onto the hierarchy.

    Only used for diagnostics. Whatever the result, the user sees
    ``ServiceUnavailableError``.
    """
    if isinstance(exc, MrWantError):
        return exc

    text = f"{type(exc).__name__}: {exc}".lower()
    if isinstance(exc, (ConnectionError, TimeoutError)) or any(
        hint in text for hint in _CONNECTION_HINTS
    ):
        return ApiConnectionError(str(exc) or "API connection failed", error_type=type(exc).__name__)
    if isinstance(exc, PermissionError) or any(hint in text for hint in _AUTH_HINTS):
        return ApiAuthenticationError(str(exc) or "API authentication failed", error_type=type(exc).__name__)
    return ApiError(str(exc) or "Generation service error", error_type=type(exc).__name__)
