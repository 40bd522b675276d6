"""API request schemas for the task tracker."""

from typing import Optional

from pydantic import BaseModel, Field


# Title and status are plain strings here so that empty titles and unknown
# statuses reach the store and are rejected there with a 400.
class TaskCreate(BaseModel):
    """Schema for creating a new task."""
    title: str = Field(default="", description="Task title")
    description: Optional[str] = Field(None, description="Task description, defaults to empty")
    status: Optional[str] = Field(None, description="Task status, defaults to todo")


class TaskUpdate(BaseModel):
    """Schema for updating an existing task.

    Empty or missing fields leave the stored value untouched.
    """
    title: Optional[str] = Field(None, description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    status: Optional[str] = Field(None, description="Task status")
