from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from bson import ObjectId
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .errors import StoreError
from .models import TodoEntity
from .repositories import Repository
from .schemas import TodoIn

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Fields:
    id: str = "_id"
    title: str = "title"
    completed: str = "completed"
    created_at: str = "createdAt"


_FIELDS = _Fields()
_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


class MongoRepository(Repository):
    """
    MongoDB repository implementing the Repository interface against a single
    collection. The client (and its connection pool) is shared by every request.
    """

    def __init__(self, collection: Collection, client: Optional[MongoClient] = None) -> None:
        self._collection = collection
        self._client = client

    @classmethod
    def connect(cls, uri: str, db_name: str, collection_name: str, timeout_ms: int = 5000) -> "MongoRepository":
        """
        Open a client, verify the server answers a ping and return a repository
        bound to db_name.collection_name. Connection errors propagate to the caller.
        """
        client: MongoClient = MongoClient(uri, tz_aware=True, serverSelectionTimeoutMS=timeout_ms)
        try:
            client.admin.command("ping")
        except PyMongoError:
            client.close()
            raise
        logger.info("Connected to MongoDB", extra={"database": db_name, "collection": collection_name})
        return cls(client[db_name][collection_name], client=client)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    def _doc_to_entity(self, doc: Mapping[str, Any]) -> TodoEntity:
        # Documents written by other clients may lack fields; fall back to zero values
        oid = doc.get(_FIELDS.id)
        created_at: Optional[datetime] = doc.get(_FIELDS.created_at)
        if not isinstance(created_at, datetime):
            created_at = oid.generation_time if isinstance(oid, ObjectId) else _ZERO_TIME
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return {
            "id": str(oid) if oid is not None else "",
            "title": str(doc.get(_FIELDS.title) or ""),
            "completed": bool(doc.get(_FIELDS.completed, False)),
            "created_at": created_at,
        }

    def list(self) -> List[TodoEntity]:
        try:
            docs = list(self._collection.find({}))
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return [self._doc_to_entity(d) for d in docs]

    def create(self, data: TodoIn) -> TodoEntity:
        now = datetime.now(timezone.utc)
        doc = {
            _FIELDS.id: ObjectId(),
            _FIELDS.title: data.title,
            _FIELDS.completed: data.completed,
            # BSON dates carry millisecond precision
            _FIELDS.created_at: now.replace(microsecond=now.microsecond // 1000 * 1000),
        }
        try:
            self._collection.insert_one(doc)
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return self._doc_to_entity(doc)

    def update(self, todo_id: str, data: TodoIn) -> bool:
        try:
            result = self._collection.update_one(
                {_FIELDS.id: ObjectId(todo_id)},
                {"$set": {_FIELDS.title: data.title, _FIELDS.completed: data.completed}},
            )
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return result.matched_count > 0

    def delete(self, todo_id: str) -> bool:
        try:
            result = self._collection.delete_one({_FIELDS.id: ObjectId(todo_id)})
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return result.deleted_count > 0
