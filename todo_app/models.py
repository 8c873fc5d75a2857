"""Core models for todo-app.

This module defines the core data structures for the todo list:
- Task: A dataclass representing a single todo item
- View: Enum for the list filter selected through the query string
- Theme: Enum for the colour scheme stored in the theme cookie
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class View(Enum):
    """Which tasks the list shows."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "View":
        """Parse a query parameter, falling back to ALL.

        Args:
            raw: Value of the ``view`` query parameter, possibly None

        Returns:
            The matching View, or View.ALL if absent or unrecognized
        """
        try:
            return cls(raw)
        except ValueError:
            return cls.ALL


class Theme(Enum):
    """Colour scheme preference."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "Theme":
        """Parse the theme cookie, falling back to SYSTEM."""
        try:
            return cls(raw)
        except ValueError:
            return cls.SYSTEM


@dataclass
class Task:
    """Task model representing a single todo item.

    Attributes:
        description: Text of the todo
        id: Unique identifier (assigned by the repository if None)
        completed: Whether the todo is done
        completed_at: When the todo was completed; None while active
        editing: Whether the row is shown as an inline edit form
        created_at: Timestamp when the task was created
    """

    description: str
    id: Optional[int] = None
    completed: bool = False
    completed_at: Optional[datetime] = None
    editing: bool = False
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-serializable form used by the read endpoint."""
        return {
            "id": self.id,
            "description": self.description,
            "completed": self.completed,
            "completedAt": self.completed_at.isoformat() if self.completed_at else None,
            "editing": self.editing,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        completed_at = data.get("completedAt")
        return cls(
            id=data["id"],
            description=data["description"],
            completed=data.get("completed", False),
            completed_at=datetime.fromisoformat(completed_at) if completed_at else None,
            editing=data.get("editing", False),
            created_at=datetime.fromisoformat(data["createdAt"]),
        )
