"""Action dispatcher for todo-app.

A submitted form carries an ``intent`` field naming the mutation plus the
fields that mutation needs. parse_action() turns the form into one of the
Action dataclasses below and dispatch() runs the matching store call.
Unknown intents are rejected before the store is touched.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Mapping, Optional, Union

from todo_app.errors import TodoError, UnknownIntentError, ValidationError
from todo_app.models import Task
from todo_app.repository import TaskRepository

logger = logging.getLogger(__name__)


class Intent(Enum):
    """Labels a submitted form uses to name its mutation."""

    CREATE_TASK = "create task"
    TOGGLE_COMPLETION = "toggle completion"
    EDIT_TASK = "edit task"
    SAVE_TASK = "save task"
    DELETE_TASK = "delete task"
    CLEAR_COMPLETED = "clear completed"
    DELETE_ALL = "delete all"


@dataclass(frozen=True)
class CreateTask:
    """Add a new active task with the given description."""

    description: str


@dataclass(frozen=True)
class ToggleCompletion:
    """Flip a task's completion.

    Attributes:
        task_id: ID of the task
        completed: The completion state the client saw before toggling
    """

    task_id: int
    completed: bool


@dataclass(frozen=True)
class EditTask:
    task_id: int


@dataclass(frozen=True)
class SaveTask:
    task_id: int
    description: str


@dataclass(frozen=True)
class DeleteTask:
    task_id: int


@dataclass(frozen=True)
class ClearCompleted:
    pass


@dataclass(frozen=True)
class DeleteAll:
    pass


Action = Union[CreateTask, ToggleCompletion, EditTask, SaveTask, DeleteTask, ClearCompleted, DeleteAll]

Result = Union[Task, int, None]


def parse_intent(raw: object) -> Intent:
    """Map a raw intent label to an Intent.

    Raises:
        UnknownIntentError: If the label is missing or not recognized
    """
    try:
        return Intent(raw)
    except ValueError:
        raise UnknownIntentError(raw) from None


def parse_task_id(raw: Optional[str]) -> int:
    """Parse the ``id`` form field.

    Raises:
        ValidationError: If the field is missing or not an integer
    """
    if raw is None or raw == "":
        raise ValidationError("Missing task id.")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid task id: {raw!r}") from None


def _parse_bool(raw: Optional[str]) -> bool:
    # The form carries the current state as a JSON literal: "true" / "false"
    try:
        value = json.loads(raw) if raw is not None else None
    except ValueError:
        value = None
    if not isinstance(value, bool):
        raise ValidationError(f"Invalid completed flag: {raw!r}")
    return value


def parse_action(form: Mapping[str, str]) -> Action:
    """Build the Action for a submitted form.

    Args:
        form: Form fields, including ``intent``

    Returns:
        The Action variant matching the intent

    Raises:
        UnknownIntentError: If the intent is missing or unrecognized
        ValidationError: If a required field is missing or malformed
    """
    intent = parse_intent(form.get("intent"))

    if intent is Intent.CREATE_TASK:
        return CreateTask(description=form.get("description", ""))
    if intent is Intent.TOGGLE_COMPLETION:
        return ToggleCompletion(
            task_id=parse_task_id(form.get("id")),
            completed=_parse_bool(form.get("completed")),
        )
    if intent is Intent.EDIT_TASK:
        return EditTask(task_id=parse_task_id(form.get("id")))
    if intent is Intent.SAVE_TASK:
        return SaveTask(
            task_id=parse_task_id(form.get("id")),
            description=form.get("description", ""),
        )
    if intent is Intent.DELETE_TASK:
        return DeleteTask(task_id=parse_task_id(form.get("id")))
    if intent is Intent.CLEAR_COMPLETED:
        return ClearCompleted()
    return DeleteAll()


def _create_task(repo: TaskRepository, action: CreateTask) -> Task:
    return repo.create(action.description)


def _toggle_completion(repo: TaskRepository, action: ToggleCompletion) -> Task:
    completed = not action.completed
    return repo.update(
        action.task_id,
        completed=completed,
        completed_at=datetime.now() if completed else None,
    )


def _edit_task(repo: TaskRepository, action: EditTask) -> Task:
    return repo.update(action.task_id, editing=True)


def _save_task(repo: TaskRepository, action: SaveTask) -> Task:
    if not action.description.strip():
        raise ValidationError("Description cannot be empty.")
    return repo.update(action.task_id, description=action.description, editing=False)


def _delete_task(repo: TaskRepository, action: DeleteTask) -> Task:
    return repo.delete(action.task_id)


def _clear_completed(repo: TaskRepository, action: ClearCompleted) -> int:
    return repo.clear_completed()


def _delete_all(repo: TaskRepository, action: DeleteAll) -> int:
    return repo.delete_all()


HANDLERS: Dict[type, Callable[[TaskRepository, Action], Result]] = {
    CreateTask: _create_task,
    ToggleCompletion: _toggle_completion,
    EditTask: _edit_task,
    SaveTask: _save_task,
    DeleteTask: _delete_task,
    ClearCompleted: _clear_completed,
    DeleteAll: _delete_all,
}


def dispatch(repo: TaskRepository, action: Action) -> Result:
    """Run the store operation for an action.

    Args:
        repo: Task store to mutate
        action: Parsed action

    Returns:
        The created/updated/removed Task, or the number of tasks removed
        by a bulk action

    Raises:
        TodoError: If the store rejects the operation
    """
    handler = HANDLERS.get(type(action))
    if handler is None:
        raise UnknownIntentError(action)
    return handler(repo, action)


def handle(repo: TaskRepository, form: Mapping[str, str]) -> Result:
    """Parse and dispatch a submitted form, logging the outcome."""
    try:
        action = parse_action(form)
        result = dispatch(repo, action)
    except TodoError as e:
        logger.warning("Rejected %r: %s", form.get("intent"), e.message)
        raise

    logger.info("Handled %s", type(action).__name__)
    return result
