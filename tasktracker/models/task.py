"""Domain models for the task tracker."""

from enum import Enum

from pydantic import BaseModel, Field


class TaskStatus(str, Enum):
    """Task status enumeration."""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    @classmethod
    def allowed(cls) -> str:
        """Comma separated list of accepted status values."""
        return ", ".join(status.value for status in cls)


class Task(BaseModel):
    """Task domain model."""

    id: str = Field(..., description="Task identifier assigned by the store")
    title: str = Field(..., min_length=1, description="Task title")
    description: str = Field(default="", description="Task description")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="Task status")

    def numeric_id(self):
        """Return the integer value of the ID, or None when it is not numeric."""
        try:
            return int(self.id)
        except ValueError:
            return None
