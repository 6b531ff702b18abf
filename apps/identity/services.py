"""Services for Identity app."""
import logging
from typing import Tuple
from uuid import UUID

from django.contrib.auth import authenticate
from django.db.models import Count, QuerySet

from apps.core.errors import AuthenticationError, BadRequestError, NotFoundError
from apps.core.pagination import Page
from .dtos import LoginIn, RegisterIn
from .jwt_auth import create_access_token
from .models import User, UserRole

logger = logging.getLogger(__name__)


# =============================================================================
# Authentication
# =============================================================================

def register_user(payload: RegisterIn) -> User:
    if User.objects.filter(email=payload.email).exists():
        raise BadRequestError("User already exists with this email")

    user = User.objects.create_user(
        email=payload.email,
        password=payload.password,
        name=payload.name,
        role=payload.role or UserRole.USER,
    )
    logger.info("Registered user %s (%s)", user.id, user.role)
    return user


def login_user(payload: LoginIn) -> Tuple[User, str]:
    """Returns the user and a fresh access token."""
    user = authenticate(username=payload.email, password=payload.password)
    if user is None:
        raise AuthenticationError("Invalid email or password")

    return user, create_access_token(user.id, user.role)


# =============================================================================
# User Management
# =============================================================================

def list_users(page: Page) -> Tuple[QuerySet, int]:
    """Newest users first, each annotated with `task_count`."""
    users = User.objects.annotate(task_count=Count('tasks')).order_by('-created_at', '-id')
    total = User.objects.count()
    return page.slice(users), total


def get_user(user_id: UUID) -> User:
    try:
        return User.objects.get(id=user_id)
    except User.DoesNotExist:
        raise NotFoundError("User not found")


def delete_user(acting_user: User, user_id: UUID) -> None:
    user = get_user(user_id)

    if user.id == acting_user.id:
        raise BadRequestError("You cannot delete your own account")

    # Tasks go with the user (on_delete=CASCADE)
    user.delete()
    logger.info("User %s deleted by %s", user_id, acting_user.id)
