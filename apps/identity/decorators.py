from functools import wraps
from typing import Callable
from django.http import HttpRequest

from apps.core.errors import AuthenticationError, AuthorizationError
from .permissions import get_user_permissions

ADMIN_REQUIRED_MESSAGE = "Access denied. Admin privileges required."


def has_permission(required_perm: str, message: str = ADMIN_REQUIRED_MESSAGE):
    """
    Decorator to enforce a specific permission on a Django Ninja endpoint.

    Must sit below the route decorator of a router that authenticates with
    `JWTAuth`, so the resolved user is already on `request.auth`.

    Usage:
        @router.get("/some-path")
        @has_permission(Permissions.SOME_PERM)
        def my_view(request):
            ...
    """
    def decorator(view_func: Callable):
        @wraps(view_func)
        def wrapper(request: HttpRequest, *args, **kwargs):
            user = getattr(request, 'auth', None)
            if user is None:
                raise AuthenticationError("Not authenticated")

            if required_perm not in get_user_permissions(user):
                raise AuthorizationError(message)

            return view_func(request, *args, **kwargs)
        return wrapper
    return decorator
