"""Schemas for Tasks app."""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from ninja import Field, Schema
from pydantic import field_validator

from apps.core.schemas import Envelope, PaginationOut
from .models import TaskStatus

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


def _check_description(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value) > DESCRIPTION_MAX_LENGTH:
        raise ValueError(f'Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters')
    return value


def _status_error() -> ValueError:
    return ValueError(f"Status must be one of: {', '.join(TaskStatus.values)}")


# =============================================================================
# Input
# =============================================================================

class TaskCreate(Schema):
    title: str
    description: Optional[str] = None
    status: Optional[str] = None

    @field_validator('title')
    @classmethod
    def check_title(cls, value: str) -> str:
        value = value.strip()
        if not TITLE_MIN_LENGTH <= len(value) <= TITLE_MAX_LENGTH:
            raise ValueError(
                f'Title must be between {TITLE_MIN_LENGTH} and {TITLE_MAX_LENGTH} characters'
            )
        return value

    @field_validator('description')
    @classmethod
    def check_description(cls, value: Optional[str]) -> Optional[str]:
        return _check_description(value)

    @field_validator('status')
    @classmethod
    def check_status(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in TaskStatus.values:
            raise _status_error()
        return value


class TaskUpdate(Schema):
    """
    Partial update. Empty values pass validation and are then ignored by
    `update_task`, so `{"title": ""}` leaves the title as it was.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None

    @field_validator('title')
    @classmethod
    def check_title(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and len(value) > TITLE_MAX_LENGTH:
            raise ValueError(f'Title cannot exceed {TITLE_MAX_LENGTH} characters')
        return value

    @field_validator('description')
    @classmethod
    def check_description(cls, value: Optional[str]) -> Optional[str]:
        return _check_description(value)

    @field_validator('status')
    @classmethod
    def check_status(cls, value: Optional[str]) -> Optional[str]:
        if value and value not in TaskStatus.values:
            raise _status_error()
        return value


# =============================================================================
# Output
# =============================================================================

class TaskOwnerOut(Schema):
    id: UUID
    name: str
    email: str


class TaskOut(Schema):
    id: UUID
    title: str
    description: Optional[str] = None
    status: str
    userId: UUID = Field(..., alias='owner_id')
    createdAt: datetime = Field(..., alias='created_at')
    updatedAt: datetime = Field(..., alias='updated_at')

    @staticmethod
    def resolve_description(obj):
        return obj.description or None


class TaskDetailOut(TaskOut):
    user: TaskOwnerOut = Field(..., alias='owner')


class TaskPagination(PaginationOut):
    totalTasks: int


class TaskData(Schema):
    task: TaskOut


class TaskEnvelope(Envelope):
    data: TaskData


class TaskDetailData(Schema):
    task: TaskDetailOut


class TaskDetailEnvelope(Envelope):
    data: TaskDetailData


class TaskListData(Schema):
    tasks: List[TaskOut]
    pagination: TaskPagination


class TaskListEnvelope(Envelope):
    data: TaskListData
