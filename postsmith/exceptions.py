"""Exception taxonomy.

Every client-visible failure derives from ``BaseAPIException`` and is turned
into the standard error envelope by ``postsmith.middleware.error_handler``.
``error_code`` is the tag clients branch on (``GuestLimitExceeded``,
``CooldownActive``, ...).
"""

from typing import Any, Optional


class BaseAPIException(Exception):
    """Base class for all API-facing errors."""

    status_code: int = 500
    error_code: str = "InternalServerError"
    # Message sent to clients for 5xx responses; the real message is only logged.
    public_message: str = "Something went wrong on the server. Please try again shortly."

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    @property
    def client_message(self) -> str:
        if self.status_code >= 500:
            return self.public_message
        return self.message


# ============================================================================
# 4xx - caller errors
# ============================================================================


class ValidationError(BaseAPIException):
    """Request field failed sanitization or validation."""

    status_code = 400
    error_code = "ValidationError"

    def __init__(self, field: str, message: str):
        super().__init__(message, details={"field": field})
        self.field = field


class MissingTokenError(BaseAPIException):
    status_code = 401
    error_code = "Unauthorized"

    def __init__(self, message: str = "Missing or invalid authorization token."):
        super().__init__(message)


class InvalidTokenError(BaseAPIException):
    status_code = 401
    error_code = "Unauthorized"

    def __init__(self, message: str = "Token verification failed."):
        super().__init__(message)


class NotFoundError(BaseAPIException):
    status_code = 404
    error_code = "NotFound"

    def __init__(self, message: str = "Route not found."):
        super().__init__(message)


class UserNotFoundError(BaseAPIException):
    """Account record missing where one must exist (data-integrity fault)."""

    status_code = 404
    error_code = "UserNotFound"

    def __init__(self, identity: str):
        super().__init__("User record missing.", details={"identity": identity})
        self.identity = identity


# ============================================================================
# 429 - governance denials
# ============================================================================


class GuestLimitExceededError(BaseAPIException):
    status_code = 429
    error_code = "GuestLimitExceeded"

    def __init__(self, limit: int):
        super().__init__(
            "Guest limit reached. Sign in to continue.",
            details={"limit": limit, "requires_login": True},
        )


class DailyLimitExceededError(BaseAPIException):
    status_code = 429
    error_code = "DailyLimitExceeded"

    def __init__(self, used: int, limit: int):
        super().__init__(
            f"You have reached your {limit} free daily generations.",
            details={"used": used, "limit": limit},
        )
        self.used = used
        self.limit = limit


class CooldownActiveError(BaseAPIException):
    status_code = 429
    error_code = "CooldownActive"

    def __init__(self, seconds_remaining: int):
        super().__init__(
            f"Please wait {seconds_remaining}s before your next generation.",
            details={"seconds_remaining": seconds_remaining},
        )
        self.seconds_remaining = seconds_remaining


class RateLimitExceededError(BaseAPIException):
    """The upstream generation service signalled a rate limit."""

    status_code = 429
    error_code = "RateLimitExceeded"

    def __init__(
        self, message: str = "Upstream rate limit reached. Please wait a moment and try again."
    ):
        super().__init__(message)


class TooManyRequestsError(BaseAPIException):
    status_code = 429
    error_code = "TooManyRequests"

    def __init__(self, message: str = "Too many requests. Slow down.", retry_after: int = 1):
        super().__init__(message, details={"retry_after": retry_after})
        self.retry_after = retry_after


# ============================================================================
# 5xx
# ============================================================================


class UpstreamError(BaseAPIException):
    status_code = 502
    error_code = "UpstreamError"
    public_message = "The generation service failed. Please retry in a moment."


class ConfigurationError(BaseAPIException):
    status_code = 500
    error_code = "ConfigError"
    public_message = "The server is not configured for this operation."


class DatabaseError(BaseAPIException):
    status_code = 500
    error_code = "DatabaseError"
    public_message = "Database operation failed."


class InternalServerError(BaseAPIException):
    status_code = 500
    error_code = "InternalServerError"


# ============================================================================
# Internal (never sent to clients directly)
# ============================================================================


class UpstreamCallError(Exception):
    """A single upstream attempt failed in a retryable way."""


class LLMTimeoutError(UpstreamCallError):
    def __init__(self, provider: str, timeout_seconds: float):
        super().__init__(f"{provider} call timed out after {timeout_seconds}s")
        self.provider = provider
        self.timeout_seconds = timeout_seconds
