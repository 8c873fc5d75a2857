"""View filter for the task list."""

from typing import Iterable, List

from todo_app.models import Task, View


def matches(task: Task, view: View) -> bool:
    """Whether a task belongs in a view."""
    if view is View.ACTIVE:
        return not task.completed
    if view is View.COMPLETED:
        return task.completed
    return True


def filter_tasks(tasks: Iterable[Task], view: View, excluded: Iterable[int] = ()) -> List[Task]:
    """Narrow the full task list to what a view shows.

    Args:
        tasks: All tasks, in store order
        view: Selected view
        excluded: IDs to hide regardless of view (tasks with a delete in flight)

    Returns:
        The matching tasks, in their original order
    """
    excluded = set(excluded)
    return [task for task in tasks if task.id not in excluded and matches(task, view)]


def count_label(count: int) -> str:
    return f"{count} {'item' if count == 1 else 'items'}"
