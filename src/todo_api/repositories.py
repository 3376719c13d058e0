from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from threading import RLock
from typing import List

from bson import ObjectId
from fastapi import Request

from .models import TodoEntity
from .schemas import TodoIn
from .settings import Settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def list(self) -> List[TodoEntity]:
        """Return every stored TodoEntity."""

    @abstractmethod
    def create(self, data: TodoIn) -> TodoEntity:
        """Create and return a new TodoEntity with a store-assigned id and timestamp."""

    @abstractmethod
    def update(self, todo_id: str, data: TodoIn) -> bool:
        """Set title and completed on an existing todo. Return False if not found."""

    @abstractmethod
    def delete(self, todo_id: str) -> bool:
        """Delete a TodoEntity by id. Return True if deleted, False if not found."""

    def close(self) -> None:
        """Release backend resources. No-op by default."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and local runs
    without a database.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: dict[str, TodoEntity] = {}

    def list(self) -> List[TodoEntity]:
        with self._lock:
            items = sorted(self._items.values(), key=lambda t: t["created_at"])
            return [t.copy() for t in items]

    def create(self, data: TodoIn) -> TodoEntity:
        entity: TodoEntity = {
            "id": str(ObjectId()),
            "title": data.title,
            "completed": data.completed,
            "created_at": datetime.now(timezone.utc),
        }
        with self._lock:
            self._items[entity["id"]] = entity
        return entity.copy()

    def update(self, todo_id: str, data: TodoIn) -> bool:
        with self._lock:
            existing = self._items.get(todo_id)
            if existing is None:
                return False
            existing["title"] = data.title
            existing["completed"] = data.completed
            return True

    def delete(self, todo_id: str) -> bool:
        with self._lock:
            return self._items.pop(todo_id, None) is not None


# PUBLIC_INTERFACE
def build_repository(settings: Settings) -> Repository:
    """
    Factory to return the configured repository based on settings.
    - mongo: MongoRepository connected to settings.mongo_uri (fails fast if unreachable)
    - memory: InMemoryRepository
    """
    if settings.persistence_backend == "memory":
        logger.info("Using in-memory todo store")
        return InMemoryRepository()

    from .db import MongoRepository

    return MongoRepository.connect(
        settings.mongo_uri,
        settings.mongo_db_name,
        settings.mongo_collection,
        timeout_ms=settings.mongo_timeout_ms,
    )


# PUBLIC_INTERFACE
def get_repository(request: Request) -> Repository:
    """Return the repository shared by all requests, created at application startup."""
    return request.app.state.repository
