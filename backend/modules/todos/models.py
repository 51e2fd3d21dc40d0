"""
Todos module data models.
"""

import datetime as dt
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class TodoFilter(str, Enum):
    """Client-side partition of an already fetched todo list."""

    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"

    def matches(self, todo: "Todo") -> bool:
        """Whether a todo belongs to this partition."""
        if self is TodoFilter.PENDING:
            return not todo.completed
        if self is TodoFilter.COMPLETED:
            return todo.completed
        return True


class Todo(BaseModel):
    """A single todo row owned by one user."""

    # BIGINT ids from the store are carried as strings
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str = Field(..., description="Row ID generated by the store")
    user_id: str = Field(..., description="Owner, fixed at creation")
    task: str = Field(..., description="Task text")
    completed: bool = Field(default=False)
    date: Optional[dt.date] = Field(default=None, description="Optional due date")
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None


class CreateTodoRequest(BaseModel):
    """Request to create a todo."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task: str = Field(..., min_length=1, max_length=1000, description="Task text")
    due_date: Optional[dt.date] = Field(default=None, description="Due date (YYYY-MM-DD)")


class UpdateTodoRequest(BaseModel):
    """
    Full replacement of the mutable todo fields.

    ``due_date`` is written as-is, so omitting it clears the date.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    task: str = Field(..., min_length=1, max_length=1000)
    completed: bool
    due_date: Optional[dt.date] = None
