from __future__ import annotations

import logging

from bson import ObjectId
from fastapi import APIRouter, Depends, status

from ..errors import StoreError, TodoAPIError
from ..repositories import Repository, get_repository
from ..schemas import Message, TodoCreated, TodoIn, TodoList, TodoOut

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/todo",
    tags=["todos"],
)


def _get_repo(repo: Repository = Depends(get_repository)) -> Repository:
    """
    Dependency wrapper for repository to keep signatures clean.
    """
    return repo


def _valid_id(todo_id: str) -> str:
    """Trim the path id and reject anything that is not a 24-hex ObjectId."""
    tid = todo_id.strip()
    if not ObjectId.is_valid(tid):
        raise TodoAPIError(status.HTTP_400_BAD_REQUEST, "Invalid ID")
    return tid


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=TodoList,
    summary="List Todos",
    description="Return every stored Todo item under the `data` key.",
    responses={
        200: {"description": "List retrieved successfully"},
        500: {"description": "Store failure"},
    },
)
@router.get("/", response_model=TodoList, include_in_schema=False)
def list_todos(repo: Repository = Depends(_get_repo)) -> TodoList:
    """
    List all todos.
    """
    try:
        items = repo.list()
    except StoreError as e:
        raise TodoAPIError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to load todo list", e) from e
    return TodoList(data=[TodoOut(**it) for it in items])  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return its generated id.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"description": "Validation error"},
        500: {"description": "Store failure"},
    },
)
@router.post("/", response_model=TodoCreated, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_todo(payload: TodoIn, repo: Repository = Depends(_get_repo)) -> TodoCreated:
    """
    Create a new Todo.
    """
    try:
        created = repo.create(payload)
    except StoreError as e:
        raise TodoAPIError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to add todo", e) from e
    logger.info("Todo added", extra={"todo_id": created["id"]})
    return TodoCreated(message="Todo added", todo_id=created["id"])


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=Message,
    summary="Update Todo",
    description="Replace the title and completion flag of an existing Todo item.",
    responses={
        200: {"description": "Todo updated"},
        400: {"description": "Invalid id or body"},
        404: {"description": "Todo not found"},
        500: {"description": "Store failure"},
    },
)
def update_todo(todo_id: str, payload: TodoIn, repo: Repository = Depends(_get_repo)) -> Message:
    """
    Update title/completed of a Todo. created_at is left untouched.
    """
    tid = _valid_id(todo_id)
    try:
        found = repo.update(tid, payload)
    except StoreError as e:
        raise TodoAPIError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to update todo", e) from e
    if not found:
        raise TodoAPIError(status.HTTP_404_NOT_FOUND, "Todo not found")
    return Message(message="Todo updated")


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    response_model=Message,
    summary="Delete Todo",
    description="Delete a Todo item by ID.",
    responses={
        200: {"description": "Todo deleted"},
        400: {"description": "Invalid id"},
        404: {"description": "Todo not found"},
        500: {"description": "Store failure"},
    },
)
def delete_todo(todo_id: str, repo: Repository = Depends(_get_repo)) -> Message:
    """
    Delete a Todo. Returns 200 on success, 404 if not found.
    """
    tid = _valid_id(todo_id)
    try:
        deleted = repo.delete(tid)
    except StoreError as e:
        raise TodoAPIError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to delete todo", e) from e
    if not deleted:
        raise TodoAPIError(status.HTTP_404_NOT_FOUND, "Todo not found")
    return Message(message="Todo deleted")
