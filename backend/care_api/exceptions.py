"""Error taxonomy shared by services, the auth gate and the HTTP layer.

Every error the API returns on purpose is a ``CareAPIError``. The
exception handlers in ``care_api.main`` render ``message`` and ``details``
into the ``{"error": ..., "details": ...}`` envelope using ``status_code``.
"""

from typing import Any, Optional


class CareAPIError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ConfigurationError(Exception):
    """Raised at startup when required configuration is absent or invalid."""


class ValidationError(CareAPIError):
    status_code = 400
    default_message = "Invalid request"

    @classmethod
    def missing_fields(cls, message: str, fields: dict[str, str]) -> "ValidationError":
        return cls(message, details=fields)


class NotFoundError(CareAPIError):
    status_code = 404
    default_message = "Not found"


class InvalidCredentials(CareAPIError):
    status_code = 401
    default_message = "Invalid credentials"


class AccountDisabled(CareAPIError):
    status_code = 403
    default_message = "Account disabled"


class DuplicateEmail(CareAPIError):
    status_code = 409
    default_message = "Email already in use"


class Unauthenticated(CareAPIError):
    status_code = 401
    default_message = "Not authenticated"


class TokenMissing(Unauthenticated):
    default_message = "Access token missing"


class TokenError(Unauthenticated):
    """A token was presented but could not be accepted."""

    status_code = 403
    default_message = "Invalid or expired token"
    reason = "invalid"


class MalformedToken(TokenError):
    reason = "malformed"


class InvalidSignature(TokenError):
    reason = "invalid_signature"


class TokenExpired(TokenError):
    reason = "expired"


class TransactionFailure(CareAPIError):
    status_code = 500
    default_message = "The operation could not be completed"
