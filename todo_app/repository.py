"""Task repository for managing task operations.

This module provides the TaskRepository class, the task store the rest of the
app talks to. Every operation is a single load-mutate-save against the storage
layer, so a rejected operation never leaves a partial change behind.
"""

import logging
import threading
from typing import List

from todo_app.errors import NotFoundError, ValidationError
from todo_app.models import Task
from todo_app.storage import Storage

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"description", "completed", "completed_at", "editing"})


class TaskRepository:
    """Repository for managing tasks with storage backend.

    This class provides the task store operations: read all, create, update by
    ID, delete by ID, delete all and clear completed. It uses a Storage
    implementation for persistence and manages task ID generation. Reads and
    writes share one lock, so a read never observes a write in progress.

    Attributes:
        storage: Storage backend for persisting tasks
    """

    def __init__(self, storage: Storage):
        self.storage = storage
        self._lock = threading.RLock()

    def read_all(self) -> List[Task]:
        """Get all tasks in creation order.

        Returns:
            List of Task objects, sorted by ID
        """
        with self._lock:
            tasks = self.storage.load()
        return [tasks[task_id] for task_id in sorted(tasks.keys())]

    def get(self, task_id: int) -> Task:
        """Get a specific task by ID.

        Raises:
            NotFoundError: If no task has this ID
        """
        with self._lock:
            task = self.storage.load().get(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    def create(self, description: str) -> Task:
        """Create a new task.

        Args:
            description: Text of the todo

        Returns:
            The created Task object with assigned ID

        Raises:
            ValidationError: If the description is blank
        """
        if not description or not description.strip():
            raise ValidationError("Description cannot be empty.")

        with self._lock:
            tasks = self.storage.load()

            # IDs continue from the current max
            next_id = max(tasks.keys(), default=0) + 1
            task = Task(id=next_id, description=description)

            tasks[next_id] = task
            self.storage.save(tasks)

        logger.debug("Created task #%d", task.id)
        return task

    def update(self, task_id: int, **changes) -> Task:
        """Apply field changes to an existing task.

        Args:
            task_id: ID of the task to update
            **changes: New values for description, completed, completed_at
                      or editing

        Returns:
            The updated Task object

        Raises:
            ValidationError: If a change names an unknown field
            NotFoundError: If no task has this ID
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        with self._lock:
            tasks = self.storage.load()

            task = tasks.get(task_id)
            if task is None:
                raise NotFoundError(task_id)

            for name, value in changes.items():
                setattr(task, name, value)
            self.storage.save(tasks)

        logger.debug("Updated task #%d: %s", task_id, ", ".join(sorted(changes)))
        return task

    def delete(self, task_id: int) -> Task:
        """Delete a task by ID.

        Returns:
            The removed Task object

        Raises:
            NotFoundError: If no task has this ID
        """
        with self._lock:
            tasks = self.storage.load()

            if task_id not in tasks:
                raise NotFoundError(task_id)

            task = tasks.pop(task_id)
            self.storage.save(tasks)

        logger.debug("Deleted task #%d", task_id)
        return task

    def clear_completed(self) -> int:
        """Delete every completed task.

        Returns:
            Number of tasks removed (0 when none are completed)
        """
        with self._lock:
            tasks = self.storage.load()
            remaining = {task_id: task for task_id, task in tasks.items() if not task.completed}
            removed = len(tasks) - len(remaining)

            if removed:
                self.storage.save(remaining)

        logger.debug("Cleared %d completed task(s)", removed)
        return removed

    def delete_all(self) -> int:
        """Delete every task.

        Returns:
            Number of tasks removed (0 when the store was already empty)
        """
        with self._lock:
            tasks = self.storage.load()
            self.storage.save({})

        logger.debug("Deleted all %d task(s)", len(tasks))
        return len(tasks)
