"""
Task API endpoints.

All routes require a bearer token. Users only ever list their own tasks.
"""
from typing import Optional
from uuid import UUID
from django.http import HttpRequest
from ninja import Router

from apps.core.pagination import Page
from apps.core.schemas import MessageOut, envelope, pagination
from apps.identity.auth import JWTAuth
from .dtos import TaskCreate, TaskDetailEnvelope, TaskEnvelope, TaskListEnvelope, TaskUpdate
from .services import create_task, delete_task, get_task, list_tasks, update_task

router = Router(tags=["Tasks"], auth=JWTAuth())


@router.post("", response={201: TaskDetailEnvelope})
def create(request: HttpRequest, payload: TaskCreate):
    task = create_task(request.auth, payload)
    return 201, envelope({'task': task}, "Task created successfully")


@router.get("", response=TaskListEnvelope)
def list_own_tasks(
    request: HttpRequest,
    status: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
):
    """
    List the caller's tasks, newest first.

    Query Parameters:
    - status: exact match on PENDING, IN_PROGRESS or COMPLETED
    - page: 1-based page number (default 1)
    - limit: page size (default 10)
    """
    paging = Page.from_query(page, limit)
    tasks, total = list_tasks(request.auth, paging, status=status)
    return envelope({
        'tasks': list(tasks),
        'pagination': pagination(paging, total, 'totalTasks'),
    })


@router.get("/{task_id}", response=TaskDetailEnvelope)
def retrieve(request: HttpRequest, task_id: UUID):
    """
    Owners and admins can view a task.
    """
    return envelope({'task': get_task(request.auth, task_id)})


@router.put("/{task_id}", response=TaskEnvelope)
def update(request: HttpRequest, task_id: UUID, payload: TaskUpdate):
    """
    Partially update a task. Only the owner may update it.
    """
    task = update_task(request.auth, task_id, payload)
    return envelope({'task': task}, "Task updated successfully")


@router.delete("/{task_id}", response=MessageOut)
def delete(request: HttpRequest, task_id: UUID):
    """
    Delete a task. Only the owner may delete it.
    """
    delete_task(request.auth, task_id)
    return envelope(message="Task deleted successfully")
