"""
Bearer token authentication for Django Ninja routers.

A request without an `Authorization: Bearer` header never reaches
`authenticate`; ninja raises its own AuthenticationError and the core
handlers answer 401 "Not authorized, no token".

ninja authenticates before it parses path, query or body parameters, so a
permission passed to `JWTAuth` is enforced ahead of validation: a STANDARD
user hitting an admin route with a malformed id gets 403, not 400.
"""
import logging
from typing import Optional
from django.http import HttpRequest
from ninja.security import HttpBearer

from apps.core.errors import AuthenticationError, AuthorizationError
from .decorators import ADMIN_REQUIRED_MESSAGE
from .jwt_auth import get_user_id_from_token
from .models import User
from .permissions import user_has_permission

logger = logging.getLogger(__name__)


class JWTAuth(HttpBearer):
    """Resolves the bearer token to an active User and puts it on `request.auth`."""

    def __init__(self, permission: Optional[str] = None, message: str = ADMIN_REQUIRED_MESSAGE):
        super().__init__()
        self.permission = permission
        self.message = message

    def authenticate(self, request: HttpRequest, token: str) -> User:
        user_id = get_user_id_from_token(token)
        if not user_id:
            raise AuthenticationError("Not authorized, token failed")

        try:
            user = User.objects.get(id=user_id, is_active=True)
        except User.DoesNotExist:
            logger.warning("Valid token presented for missing user %s", user_id)
            raise AuthenticationError("User not found")

        if self.permission and not user_has_permission(user, self.permission):
            raise AuthorizationError(self.message)
        return user
