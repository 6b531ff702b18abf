"""Schemas for Identity app."""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from ninja import Field, Schema
from pydantic import field_validator

from apps.core.schemas import Envelope, PaginationOut
from .models import UserRole


def _normalize_email(value: str) -> str:
    value = value.strip().lower()
    try:
        validate_email(value)
    except DjangoValidationError:
        raise ValueError('Please provide a valid email')
    return value


# =============================================================================
# Input
# =============================================================================

class RegisterIn(Schema):
    name: str
    email: str
    password: str
    role: Optional[str] = None

    @field_validator('name')
    @classmethod
    def check_name(cls, value: str) -> str:
        value = value.strip()
        if not 2 <= len(value) <= 100:
            raise ValueError('Name must be between 2 and 100 characters')
        return value

    @field_validator('email')
    @classmethod
    def check_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator('password')
    @classmethod
    def check_password(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError('Password must be at least 6 characters')
        return value

    @field_validator('role')
    @classmethod
    def check_role(cls, value: Optional[str]) -> str:
        if not value:
            return UserRole.USER
        if value not in UserRole.values:
            raise ValueError(f"Role must be one of: {', '.join(UserRole.values)}")
        return value


class LoginIn(Schema):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def check_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator('password')
    @classmethod
    def check_password(cls, value: str) -> str:
        if not value:
            raise ValueError('Password is required')
        return value


# =============================================================================
# Output
# =============================================================================

class UserOut(Schema):
    id: UUID
    email: str
    name: str
    role: str
    createdAt: datetime = Field(..., alias='created_at')


class UserListItemOut(UserOut):
    taskCount: int = Field(0, alias='task_count')


class UserTaskOut(Schema):
    id: UUID
    title: str
    description: Optional[str] = None
    status: str
    createdAt: datetime = Field(..., alias='created_at')

    @staticmethod
    def resolve_description(obj):
        return obj.description or None


class UserDetailOut(UserOut):
    tasks: List[UserTaskOut] = []

    @staticmethod
    def resolve_tasks(obj):
        return list(obj.tasks.order_by('-created_at', '-id'))


class UserPagination(PaginationOut):
    totalUsers: int


class UserData(Schema):
    user: UserOut


class UserEnvelope(Envelope):
    data: UserData


class LoginData(Schema):
    user: UserOut
    token: str


class LoginEnvelope(Envelope):
    data: LoginData


class UserListData(Schema):
    users: List[UserListItemOut]
    pagination: UserPagination


class UserListEnvelope(Envelope):
    data: UserListData


class UserDetailData(Schema):
    user: UserDetailOut


class UserDetailEnvelope(Envelope):
    data: UserDetailData
