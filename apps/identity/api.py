"""
Identity API endpoints.

Provides registration, login and the current-user lookup under /auth, and
admin-only user management under /users. Every /users endpoint requires a
bearer token and the ADMIN role; the role is checked during authentication,
before the path id is parsed.
"""
from typing import Optional
from uuid import UUID
from django.http import HttpRequest
from ninja import Router

from apps.core.pagination import Page
from apps.core.schemas import MessageOut, envelope, pagination
from .auth import JWTAuth
from .decorators import has_permission
from .dtos import (
    LoginEnvelope,
    LoginIn,
    RegisterIn,
    UserDetailEnvelope,
    UserEnvelope,
    UserListEnvelope,
)
from .permissions import Permissions
from .services import delete_user, get_user, list_users, login_user, register_user

auth_router = Router(tags=["Auth"])
users_router = Router(tags=["Users"], auth=JWTAuth(permission=Permissions.USERS_VIEW))


# =============================================================================
# Auth Endpoints
# =============================================================================

@auth_router.post("/register", response={201: UserEnvelope})
def register(request: HttpRequest, payload: RegisterIn):
    """
    Create an account. The client logs in afterwards to obtain a token.
    """
    user = register_user(payload)
    return 201, envelope({'user': user}, "User registered successfully")


@auth_router.post("/login", response=LoginEnvelope)
def login(request: HttpRequest, payload: LoginIn):
    """
    Exchange email and password for a bearer token.
    """
    user, token = login_user(payload)
    return envelope({'user': user, 'token': token}, "Login successful")


@auth_router.get("/me", response=UserEnvelope, auth=JWTAuth())
def me(request: HttpRequest):
    return envelope({'user': request.auth})


# =============================================================================
# User Management Endpoints
# =============================================================================

@users_router.get("", response=UserListEnvelope)
def list_all_users(request: HttpRequest, page: Optional[str] = None, limit: Optional[str] = None):
    """
    List every user with their task count, newest first.
    """
    paging = Page.from_query(page, limit)
    users, total = list_users(paging)
    return envelope({
        'users': list(users),
        'pagination': pagination(paging, total, 'totalUsers'),
    })


@users_router.get("/{user_id}", response=UserDetailEnvelope)
def get_user_detail(request: HttpRequest, user_id: UUID):
    """
    Get a user together with all of their tasks.
    """
    return envelope({'user': get_user(user_id)})


@users_router.delete("/{user_id}", response=MessageOut)
@has_permission(Permissions.USERS_DELETE)
def delete_user_account(request: HttpRequest, user_id: UUID):
    """
    Delete a user and, with them, their tasks. Admins cannot delete themselves.
    """
    delete_user(request.auth, user_id)
    return envelope(message="User deleted successfully")
