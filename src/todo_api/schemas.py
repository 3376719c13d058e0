from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator


# PUBLIC_INTERFACE
class TodoIn(BaseModel):
    """
    Request body for creating or updating a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy milk",
                "completed": False,
            }
        }
    )

    title: str = Field(..., description="Short title for the todo item")
    completed: StrictBool = Field(default=False, description="Completion status flag")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """
        Strip whitespace and reject empty titles.
        """
        s = v.strip()
        if not s:
            raise ValueError("title is required")
        return s


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "65a1f0c2e4b0a1b2c3d4e5f6",
                "title": "Buy milk",
                "completed": False,
                "created_at": "2025-01-25T10:15:30.123000+00:00",
            }
        }
    )

    id: str = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Short title for the todo item")
    completed: bool = Field(..., description="Completion status flag")
    created_at: datetime = Field(..., description="Creation timestamp")


class TodoList(BaseModel):
    data: List[TodoOut] = Field(..., description="All stored todo items")


class TodoCreated(BaseModel):
    message: str = Field(..., description="Confirmation message")
    todo_id: str = Field(..., description="Identifier assigned to the new todo")


class Message(BaseModel):
    message: str = Field(..., description="Confirmation message")
