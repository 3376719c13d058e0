from __future__ import annotations

from datetime import datetime
from typing import TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A lightweight domain model representing a Todo item as handed out by the
    storage backends.

    Fields:
    - id: 24-character hex ObjectId string, assigned by the store
    - title: Short title (non-empty, trimmed on input via schemas)
    - completed: Boolean completion flag
    - created_at: UTC creation timestamp (datetime), never mutated
    """

    id: str
    title: str
    completed: bool
    created_at: datetime
