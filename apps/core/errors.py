"""
Error taxonomy for the API.

Services and auth helpers raise these; the handlers registered in
`apps.core.handlers` turn them into the `{success: false, ...}` envelope.
"""
from typing import Dict, List, Optional


class ApiError(Exception):
    """Base class for errors that carry their own HTTP status code."""

    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(ApiError):
    status_code = 400
    default_message = "Bad request"


class ValidationError(BadRequestError):
    """Request body failed validation. Carries every field violation."""

    default_message = "Validation failed"

    def __init__(self, errors: List[Dict[str, str]], message: Optional[str] = None):
        self.errors = errors
        super().__init__(message)


class AuthenticationError(ApiError):
    status_code = 401
    default_message = "Not authenticated"


class AuthorizationError(ApiError):
    status_code = 403
    default_message = "Access denied"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Record not found"
