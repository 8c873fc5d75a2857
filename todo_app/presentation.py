"""Page state for the todo list templates.

PageContext gathers everything the Jinja templates need from the task list,
the selected view, the theme and the pending state, so the templates only
lay things out.
"""

from dataclasses import dataclass, field
from typing import List, Sequence

from todo_app.models import Task, Theme, View
from todo_app.pending import PendingState
from todo_app.views import count_label, filter_tasks

CONFIRM_CLEAR_COMPLETED = "Are you sure you want to clear all completed tasks?"
CONFIRM_DELETE_ALL = "Are you sure you want to delete all tasks?"

# (idle label, busy label)
ADD_LABELS = ("Add", "Adding...")
CLEAR_COMPLETED_LABELS = ("Clear Completed", "Clearing...")
DELETE_ALL_LABELS = ("Delete All", "Deleting...")

# (view, tab label, aria label)
VIEW_TABS = [
    (View.ALL, "All", "View all tasks"),
    (View.ACTIVE, "Active", "View active tasks"),
    (View.COMPLETED, "Completed", "View completed"),
]


@dataclass
class PageContext:
    """Everything one render of the page depends on."""

    tasks: Sequence[Task]
    view: View = View.ALL
    theme: Theme = Theme.SYSTEM
    pending: PendingState = field(default_factory=PendingState)

    @property
    def visible(self) -> List[Task]:
        return filter_tasks(self.tasks, self.view, self.pending.excluded_ids)

    @property
    def item_count(self) -> str:
        return f"{count_label(len(self.tasks))} left"

    @property
    def can_clear_completed(self) -> bool:
        return any(task.completed for task in self.tasks) and not self.pending.is_clearing_completed

    @property
    def can_delete_all(self) -> bool:
        return bool(self.tasks) and not self.pending.is_deleting_all

    @property
    def add_label(self) -> str:
        return ADD_LABELS[self.pending.is_adding]

    @property
    def clear_completed_label(self) -> str:
        return CLEAR_COMPLETED_LABELS[self.pending.is_clearing_completed]

    @property
    def delete_all_label(self) -> str:
        return DELETE_ALL_LABELS[self.pending.is_deleting_all]

    @property
    def theme_class(self) -> str:
        return "dark" if self.theme is Theme.DARK else ""

    def template_vars(self) -> dict:
        return {
            "page": self,
            "views": VIEW_TABS,
            "themes": list(Theme),
            "confirm_clear_completed": CONFIRM_CLEAR_COMPLETED,
            "confirm_delete_all": CONFIRM_DELETE_ALL,
            "busy_labels": {
                "add": ADD_LABELS[1],
                "clear_completed": CLEAR_COMPLETED_LABELS[1],
                "delete_all": DELETE_ALL_LABELS[1],
            },
        }
