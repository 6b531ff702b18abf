"""
Task services.

Every function takes the acting user explicitly. Reads allow the admin
override (`tasks.view_any`); updates and deletes are owner-only.
"""
import logging
from typing import Optional, Tuple
from uuid import UUID

from django.db.models import QuerySet

from apps.core.errors import AuthorizationError, NotFoundError
from apps.core.pagination import Page
from apps.identity.models import User
from apps.identity.permissions import Permissions, user_has_permission
from .dtos import TaskCreate, TaskUpdate
from .models import Task, TaskStatus

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('title', 'description', 'status')


def _get_task(task_id: UUID) -> Task:
    try:
        return Task.objects.select_related('owner').get(id=task_id)
    except Task.DoesNotExist:
        raise NotFoundError("Task not found")


def _ensure_owner(task: Task, user: User, action: str) -> None:
    if task.owner_id != user.id:
        logger.warning("User %s denied %s on task %s", user.id, action, task.id)
        raise AuthorizationError(f"Not authorized to {action} this task")


def create_task(owner: User, payload: TaskCreate) -> Task:
    task = Task.objects.create(
        title=payload.title,
        description=payload.description or '',
        status=payload.status or TaskStatus.PENDING,
        owner=owner,
    )
    logger.info("Task %s created by %s", task.id, owner.id)
    return task


def list_tasks(owner: User, page: Page, status: Optional[str] = None) -> Tuple[QuerySet, int]:
    """
    Tasks owned by `owner`, newest first, optionally filtered by status.

    Returns the requested slice and the total number of matching tasks.
    """
    tasks = Task.objects.filter(owner=owner)
    if status:
        tasks = tasks.filter(status=status)

    total = tasks.count()
    return page.slice(tasks.order_by('-created_at', '-id')), total


def get_task(requester: User, task_id: UUID) -> Task:
    task = _get_task(task_id)

    if task.owner_id != requester.id and not user_has_permission(requester, Permissions.TASKS_VIEW_ANY):
        _ensure_owner(task, requester, "access")

    return task


def update_task(requester: User, task_id: UUID, payload: TaskUpdate) -> Task:
    """
    Merge the supplied fields into the task.

    Only truthy values overwrite; omitted, null and empty-string fields keep
    their current value.
    """
    task = _get_task(task_id)
    _ensure_owner(task, requester, "update")

    changed = []
    for field in UPDATABLE_FIELDS:
        value = getattr(payload, field)
        if value:
            setattr(task, field, value)
            changed.append(field)

    if changed:
        task.save(update_fields=changed + ['updated_at'])
        logger.info("Task %s updated (%s)", task.id, ', '.join(changed))
    return task


def delete_task(requester: User, task_id: UUID) -> None:
    task = _get_task(task_id)
    _ensure_owner(task, requester, "delete")

    task.delete()
    logger.info("Task %s deleted by %s", task_id, requester.id)
