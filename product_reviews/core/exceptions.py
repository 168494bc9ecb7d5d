from typing import Any, List, Optional


class BaseServiceError(Exception):
    """Base exception for all service-related errors."""
    status_code = 500


class ValidationError(BaseServiceError):
    """Raised when a required field is missing or malformed."""
    status_code = 400


class MissingShopError(ValidationError):
    """Raised when a shop identifier is required but not supplied."""
    pass


class AuthError(BaseServiceError):
    """Raised when no access token is stored for a shop."""

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message)
        self.status_code = status_code


class UpstreamError(BaseServiceError):
    """
    Raised when the Shopify Admin API call fails.

    Carries the HTTP status and raw body of the upstream response, and the
    structured GraphQL/user errors when there are any.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
        errors: Optional[List[Any]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.errors = errors
