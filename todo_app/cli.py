"""Command-line interface for todo-app.

This module provides the CLI for running the web app and managing tasks using
argparse. It supports the following commands:
- serve: Run the web server
- list: List tasks, optionally for one view
- add: Create a new task
- toggle: Flip a task between active and completed
- delete: Delete a task
- clear-completed: Delete every completed task
- delete-all: Delete every task
"""

import argparse
import sys
from typing import Callable, List, Optional

from todo_app.actions import Intent, handle
from todo_app.config import Config
from todo_app.errors import TodoError
from todo_app.logging_setup import setup_logging
from todo_app.models import View
from todo_app.presentation import CONFIRM_CLEAR_COMPLETED, CONFIRM_DELETE_ALL
from todo_app.repository import TaskRepository
from todo_app.storage import JsonStorage
from todo_app.views import count_label, filter_tasks


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="todo",
        description="Single-user todo list"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the web app")
    serve_parser.add_argument("--host", help="Bind address (default: TODO_HOST or 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, help="Port (default: TODO_PORT or 5000)")
    serve_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")

    # List command
    list_parser = subparsers.add_parser("list", help="List tasks")
    list_parser.add_argument(
        "--view",
        choices=[view.value for view in View],
        default=View.ALL.value,
        help="Which tasks to show (default: all)"
    )

    # Add command
    add_parser = subparsers.add_parser("add", help="Add a new task")
    add_parser.add_argument("description", help="Task description")

    # Toggle command
    toggle_parser = subparsers.add_parser("toggle", help="Toggle a task's completion")
    toggle_parser.add_argument("id", type=int, help="Task ID")

    # Delete command
    delete_parser = subparsers.add_parser("delete", help="Delete a task")
    delete_parser.add_argument("id", type=int, help="Task ID")

    # Bulk commands
    for name, help_text in (
        ("clear-completed", "Delete all completed tasks"),
        ("delete-all", "Delete all tasks"),
    ):
        bulk_parser = subparsers.add_parser(name, help=help_text)
        bulk_parser.add_argument("--yes", "-y", action="store_true", help="Skip the confirmation prompt")

    return parser


def confirm(message: str) -> bool:
    """Ask a yes/no question on stdin."""
    try:
        answer = input(f"{message} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def cmd_serve(args: argparse.Namespace, repo: TaskRepository, config: Config) -> int:
    """Handle the 'serve' command."""
    from todo_app.app import create_app

    app = create_app(config, repo)
    app.run(
        host=args.host or config.host,
        port=args.port or config.port,
        debug=args.debug or config.debug,
    )
    return 0


def cmd_list(args: argparse.Namespace, repo: TaskRepository, config: Config) -> int:
    """Handle the 'list' command.

    Args:
        args: Parsed command-line arguments
        repo: TaskRepository instance
        config: Runtime settings

    Returns:
        Exit code (0 for success)
    """
    all_tasks = repo.read_all()
    tasks = filter_tasks(all_tasks, View(args.view))

    if not tasks:
        print("No tasks found.")
        return 0

    for task in tasks:
        status_icon = "✓" if task.completed else " "
        print(f"[{status_icon}] #{task.id} {task.description}")

    print(f"{count_label(len(all_tasks))} left")
    return 0


def cmd_add(args: argparse.Namespace, repo: TaskRepository, config: Config) -> int:
    task = handle(repo, {"intent": Intent.CREATE_TASK.value, "description": args.description})
    print(f"Task added: #{task.id} {task.description}")
    return 0


def cmd_toggle(args: argparse.Namespace, repo: TaskRepository, config: Config) -> int:
    """Handle the 'toggle' command.

    Returns:
        Exit code (0 for success)

    Raises:
        NotFoundError: If the task doesn't exist
    """
    current = repo.get(args.id)
    task = handle(
        repo,
        {
            "intent": Intent.TOGGLE_COMPLETION.value,
            "id": str(args.id),
            "completed": "true" if current.completed else "false",
        },
    )
    state = "completed" if task.completed else "active"
    print(f"Task #{task.id} marked as {state}: {task.description}")
    return 0


def cmd_delete(args: argparse.Namespace, repo: TaskRepository, config: Config) -> int:
    handle(repo, {"intent": Intent.DELETE_TASK.value, "id": str(args.id)})
    print(f"Task #{args.id} deleted.")
    return 0


def cmd_clear_completed(args: argparse.Namespace, repo: TaskRepository, config: Config) -> int:
    """Handle the 'clear-completed' command.

    Returns:
        Exit code (0 for success, 1 if the confirmation was declined)
    """
    if not args.yes and not confirm(CONFIRM_CLEAR_COMPLETED):
        print("Cancelled.", file=sys.stderr)
        return 1

    removed = handle(repo, {"intent": Intent.CLEAR_COMPLETED.value})
    print(f"Cleared {count_label(removed)}.")
    return 0


def cmd_delete_all(args: argparse.Namespace, repo: TaskRepository, config: Config) -> int:
    """Handle the 'delete-all' command.

    Returns:
        Exit code (0 for success, 1 if the confirmation was declined)
    """
    if not args.yes and not confirm(CONFIRM_DELETE_ALL):
        print("Cancelled.", file=sys.stderr)
        return 1

    removed = handle(repo, {"intent": Intent.DELETE_ALL.value})
    print(f"Deleted {count_label(removed)}.")
    return 0


COMMANDS: dict = {
    "serve": cmd_serve,
    "list": cmd_list,
    "add": cmd_add,
    "toggle": cmd_toggle,
    "delete": cmd_delete,
    "clear-completed": cmd_clear_completed,
    "delete-all": cmd_delete_all,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:]

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = Config.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_level)
    repo = TaskRepository(JsonStorage(config.db_path))

    handler: Optional[Callable[..., int]] = COMMANDS.get(args.command)
    if handler is None:
        print(f"Error: Unknown command '{args.command}'", file=sys.stderr)
        return 1

    try:
        return handler(args, repo, config)
    except TodoError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
