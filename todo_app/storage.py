"""Storage layer for todo-app.

This module provides an abstract storage interface and a JSON file
implementation. Saves are written to a temporary file next to the store and
moved over it with os.replace(), so a reader always sees either the previous
complete file or the new one, never a truncated or half-written file.
"""

import contextlib
import fcntl
import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterator, Union

from todo_app.models import Task


class Storage(ABC):
    """Abstract base class for task storage implementations."""

    @abstractmethod
    def save(self, tasks: Dict[int, Task]) -> None:
        """Replace the stored tasks.

        Args:
            tasks: Dictionary mapping task IDs to Task objects
        """

    @abstractmethod
    def load(self) -> Dict[int, Task]:
        """Load tasks from storage.

        Returns:
            Dictionary mapping task IDs to Task objects, in stored order
        """


class JsonStorage(Storage):
    """JSON file storage with atomic replacement.

    Writers from several processes (the web app and the CLI) are serialized
    with an fcntl lock on a ``<name>.lock`` file beside the store.

    Attributes:
        file_path: Path to the JSON storage file
    """

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = Path(file_path)

    @property
    def lock_path(self) -> Path:
        return self.file_path.with_name(self.file_path.name + ".lock")

    @contextlib.contextmanager
    def _write_lock(self) -> Iterator[None]:
        with open(self.lock_path, "a") as lock_file:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

    def save(self, tasks: Dict[int, Task]) -> None:
        """Atomically replace the JSON file with the given tasks.

        Args:
            tasks: Dictionary mapping task IDs to Task objects
        """
        self.file_path.parent.mkdir(parents=True, exist_ok=True)

        # Serialize first so a bad record never touches the disk
        payload = json.dumps({str(task_id): task.to_dict() for task_id, task in tasks.items()}, indent=2)

        with self._write_lock():
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.file_path.parent), prefix=f".{self.file_path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w") as tmp:
                    tmp.write(payload)
                    tmp.flush()
                    os.fsync(tmp.fileno())
                os.replace(tmp_name, self.file_path)
            except BaseException:
                with contextlib.suppress(FileNotFoundError):
                    os.unlink(tmp_name)
                raise

    def load(self) -> Dict[int, Task]:
        """Load tasks from the JSON file.

        Returns:
            Dictionary mapping task IDs to Task objects. Returns empty dict
            if the file doesn't exist or is empty.

        Raises:
            json.JSONDecodeError: If the file holds invalid JSON
        """
        try:
            content = self.file_path.read_text().strip()
        except FileNotFoundError:
            return {}
        if not content:
            return {}

        data = json.loads(content)
        return {int(task_id_str): Task.from_dict(task_data) for task_id_str, task_data in data.items()}
