"""End-to-end integration tests for todo-app.

This module runs the CLI in a subprocess and drives the web app through the
Flask test client against the same JSON file, ensuring all components work
together correctly.
"""

import os
import subprocess
import sys
import tempfile
from pathlib import Path

import pytest

from todo_app.app import create_app
from todo_app.config import Config

PROJECT_ROOT = Path(__file__).resolve().parents[1]


class TestIntegration:
    """E2E integration tests for the complete todo-app workflow."""

    @pytest.fixture
    def temp_db(self):
        """Create a temporary database file path for testing."""
        with tempfile.TemporaryDirectory() as tmpdir:
            yield str(Path(tmpdir) / "todos.json")

    def run_cli(self, args, db_path, stdin=None):
        """Run the CLI with given arguments.

        Args:
            args: List of command arguments
            db_path: Path to the database file
            stdin: Text to feed to confirmation prompts

        Returns:
            subprocess.CompletedProcess instance
        """
        return subprocess.run(
            [sys.executable, "-m", "todo_app"] + args,
            capture_output=True,
            text=True,
            check=False,
            input=stdin,
            env={**os.environ, "TODO_DB_PATH": db_path},
            cwd=str(PROJECT_ROOT),
        )

    def test_complete_workflow(self, temp_db):
        """Test add -> toggle -> list -> clear-completed -> delete-all."""
        result = self.run_cli(["add", "buy milk"], temp_db)
        assert result.returncode == 0
        assert "Task added: #1 buy milk" in result.stdout

        self.run_cli(["add", "walk dog"], temp_db)

        result = self.run_cli(["toggle", "1"], temp_db)
        assert result.returncode == 0
        assert "marked as completed" in result.stdout

        result = self.run_cli(["list", "--view", "completed"], temp_db)
        assert "buy milk" in result.stdout
        assert "walk dog" not in result.stdout

        result = self.run_cli(["clear-completed"], temp_db, stdin="n\n")
        assert result.returncode == 1
        assert "Cancelled." in result.stderr

        result = self.run_cli(["clear-completed"], temp_db, stdin="y\n")
        assert result.returncode == 0

        result = self.run_cli(["list"], temp_db)
        assert "buy milk" not in result.stdout
        assert "walk dog" in result.stdout

        result = self.run_cli(["delete-all", "--yes"], temp_db)
        assert result.returncode == 0

        result = self.run_cli(["list"], temp_db)
        assert "No tasks found." in result.stdout

    def test_unknown_id_fails(self, temp_db):
        result = self.run_cli(["delete", "5"], temp_db)
        assert result.returncode == 1
        assert "Error: Task #5 not found." in result.stderr

    def test_web_and_cli_share_store(self, temp_db):
        """Test that tasks added through the web app show up in the CLI."""
        client = create_app(Config(db_path=temp_db)).test_client()

        client.post("/", data={"intent": "create task", "description": "buy milk"})
        client.post("/", data={"intent": "create task", "description": "walk dog"})
        client.post("/", data={"intent": "delete task", "id": "1"})

        result = self.run_cli(["list"], temp_db)
        assert "#2 walk dog" in result.stdout
        assert "buy milk" not in result.stdout
        assert "1 item left" in result.stdout
