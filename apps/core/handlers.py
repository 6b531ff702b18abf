"""
Centralized error reporting for the NinjaAPI instance.

Every exception that escapes a view, an auth callback or request parsing
ends up here and is rendered as:

    {"success": false, "message": "...", "errors": [...], "stack": "..."}

`errors` is only present for validation failures and `stack` only when
running with DEBUG (APP_ENV=development).
"""
import logging
import traceback
from functools import partial
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.core.exceptions import ObjectDoesNotExist
from django.db import IntegrityError
from django.http import Http404, HttpRequest, HttpResponse
from ninja import NinjaAPI
from ninja.errors import AuthenticationError as NinjaAuthenticationError
from ninja.errors import HttpError
from ninja.errors import ValidationError as NinjaValidationError

from .errors import ApiError, ValidationError

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = '23505'
FOREIGN_KEY_VIOLATION = '23503'

# pydantic error types that get a friendlier message than pydantic's own
_MESSAGES = {
    'missing': "{field} is required",
    'uuid_parsing': "{field} must be a valid id",
    'uuid_type': "{field} must be a valid id",
}


def register_exception_handlers(api: NinjaAPI) -> None:
    """Attach the error normalizer to `api`."""
    api.add_exception_handler(ValidationError, partial(_handle_validation_error, api))
    api.add_exception_handler(ApiError, partial(_handle_api_error, api))
    api.add_exception_handler(NinjaValidationError, partial(_handle_request_validation_error, api))
    api.add_exception_handler(NinjaAuthenticationError, partial(_handle_missing_credentials, api))
    api.add_exception_handler(HttpError, partial(_handle_http_error, api))
    api.add_exception_handler(Http404, partial(_handle_not_found, api))
    api.add_exception_handler(ObjectDoesNotExist, partial(_handle_not_found, api))
    api.add_exception_handler(IntegrityError, partial(_handle_integrity_error, api))
    api.add_exception_handler(Exception, partial(_handle_unexpected_error, api))


# =============================================================================
# Envelope
# =============================================================================

def error_response(
    api: NinjaAPI,
    request: HttpRequest,
    status: int,
    message: str,
    exc: Optional[BaseException] = None,
    errors: Optional[List[Dict[str, str]]] = None,
) -> HttpResponse:
    body: Dict[str, Any] = {'success': False, 'message': message}
    if errors is not None:
        body['errors'] = errors
    if settings.DEBUG and exc is not None:
        body['stack'] = ''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.path, message, exc_info=exc)
    else:
        logger.info("%s %s -> %s %s", request.method, request.path, status, message)

    return api.create_response(request, body, status=status)


# =============================================================================
# Handlers
# =============================================================================

def _handle_api_error(api, request, exc: ApiError):
    return error_response(api, request, exc.status_code, exc.message, exc)


def _handle_validation_error(api, request, exc: ValidationError):
    return error_response(api, request, exc.status_code, exc.message, exc, errors=exc.errors)


def _handle_request_validation_error(api, request, exc: NinjaValidationError):
    errors = [format_field_error(error) for error in exc.errors]
    return error_response(api, request, 400, ValidationError.default_message, exc, errors=errors)


def _handle_missing_credentials(api, request, exc: NinjaAuthenticationError):
    return error_response(api, request, 401, "Not authorized, no token", exc)


def _handle_http_error(api, request, exc: HttpError):
    return error_response(api, request, exc.status_code, str(exc), exc)


def _handle_not_found(api, request, exc: Exception):
    return error_response(api, request, 404, "Record not found", exc)


def _handle_integrity_error(api, request, exc: IntegrityError):
    kind = integrity_violation_kind(exc)
    if kind == UNIQUE_VIOLATION:
        return error_response(api, request, 400, "A record with this value already exists", exc)
    if kind == FOREIGN_KEY_VIOLATION:
        return error_response(api, request, 404, "Record not found", exc)
    return _handle_unexpected_error(api, request, exc)


def _handle_unexpected_error(api, request, exc: Exception):
    return error_response(api, request, 500, "Internal Server Error", exc)


# =============================================================================
# Helpers
# =============================================================================

def integrity_violation_kind(exc: IntegrityError) -> Optional[str]:
    """
    Map an IntegrityError to a SQLSTATE class.

    PostgreSQL drivers expose the SQLSTATE on the wrapped exception
    (`sqlstate` for psycopg 3, `pgcode` for psycopg2). SQLite only gives us
    the message text.
    """
    cause = exc.__cause__
    code = getattr(cause, 'sqlstate', None) or getattr(cause, 'pgcode', None)
    if code in (UNIQUE_VIOLATION, FOREIGN_KEY_VIOLATION):
        return code

    text = str(exc).lower()
    if 'unique' in text:
        return UNIQUE_VIOLATION
    if 'foreign key' in text:
        return FOREIGN_KEY_VIOLATION
    return None


def format_field_error(error: Dict[str, Any]) -> Dict[str, str]:
    """
    Convert one pydantic error dict into `{field, message}`.

    ninja prefixes locations with the parameter source and, for bodies, the
    parameter name: ('body', 'payload', 'title') -> 'title'.
    """
    loc = [str(part) for part in error.get('loc', ())]
    if loc and loc[0] in ('body', 'query', 'path', 'header', 'cookie', 'form'):
        source, loc = loc[0], loc[1:]
        if source == 'body' and len(loc) > 1:
            loc = loc[1:]
    field = '.'.join(loc) or 'body'

    template = _MESSAGES.get(error.get('type', ''))
    if template:
        message = template.format(field=field.capitalize())
    else:
        message = str(error.get('msg', 'Invalid value'))
        if message.startswith('Value error, '):
            message = message[len('Value error, '):]
    return {'field': field, 'message': message}
