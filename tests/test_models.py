"""Tests for core models."""

from datetime import datetime

from todo_app.models import Task, Theme, View


class TestView:
    """Tests for View enum."""

    def test_view_values(self):
        """Test that View enum has correct values."""
        assert View.ALL.value == "all"
        assert View.ACTIVE.value == "active"
        assert View.COMPLETED.value == "completed"
        assert len(list(View)) == 3

    def test_parse_known_values(self):
        assert View.parse("active") is View.ACTIVE
        assert View.parse("completed") is View.COMPLETED

    def test_parse_missing_defaults_to_all(self):
        """Test that an absent query parameter selects ALL."""
        assert View.parse(None) is View.ALL

    def test_parse_unrecognized_defaults_to_all(self):
        assert View.parse("archived") is View.ALL
        assert View.parse("") is View.ALL
        assert View.parse("ACTIVE") is View.ALL


class TestTheme:
    """Tests for Theme enum."""

    def test_parse(self):
        assert Theme.parse("dark") is Theme.DARK
        assert Theme.parse("light") is Theme.LIGHT

    def test_parse_fallback_is_system(self):
        assert Theme.parse(None) is Theme.SYSTEM
        assert Theme.parse("sepia") is Theme.SYSTEM


class TestTask:
    """Tests for Task dataclass."""

    def test_task_creation_with_description_only(self):
        """Test creating a task with only a description."""
        task = Task(description="Buy milk")

        assert task.description == "Buy milk"
        assert task.id is None
        assert task.completed is False
        assert task.completed_at is None
        assert task.editing is False
        assert isinstance(task.created_at, datetime)

    def test_task_creation_with_all_fields(self):
        """Test creating a task with all fields specified."""
        created = datetime(2026, 2, 1, 12, 0, 0)
        done = datetime(2026, 2, 2, 9, 30, 0)
        task = Task(
            id=1,
            description="Walk dog",
            completed=True,
            completed_at=done,
            editing=True,
            created_at=created,
        )

        assert task.id == 1
        assert task.completed is True
        assert task.completed_at == done
        assert task.editing is True
        assert task.created_at == created

    def test_to_dict(self):
        """Test the JSON form of a task."""
        task = Task(
            id=3,
            description="Walk dog",
            completed=True,
            completed_at=datetime(2026, 2, 2, 9, 30, 0),
            created_at=datetime(2026, 2, 1, 12, 0, 0),
        )

        assert task.to_dict() == {
            "id": 3,
            "description": "Walk dog",
            "completed": True,
            "completedAt": "2026-02-02T09:30:00",
            "editing": False,
            "createdAt": "2026-02-01T12:00:00",
        }

    def test_to_dict_active_task_has_null_completed_at(self):
        task = Task(id=1, description="Buy milk")
        assert task.to_dict()["completedAt"] is None

    def test_from_dict_defaults(self):
        """Test that optional fields default when missing from stored data."""
        task = Task.from_dict({"id": 7, "description": "Old record", "createdAt": "2025-12-31T23:59:00"})

        assert task.id == 7
        assert task.completed is False
        assert task.completed_at is None
        assert task.editing is False
        assert task.created_at == datetime(2025, 12, 31, 23, 59)

    def test_task_equality(self):
        """Test that tasks with same data are equal."""
        created = datetime(2026, 2, 1, 12, 0, 0)
        task1 = Task(id=1, description="Test", created_at=created)
        task2 = Task(id=1, description="Test", created_at=created)
        assert task1 == task2
