"""Flask application for todo-app.

Routes:
- GET  /           render the list for ?view=
- POST /           handle a form-encoded intent
- GET  /api/tasks  all tasks as JSON
- POST /theme      store the theme preference cookie
"""

import logging
from typing import Optional

from flask import Flask, jsonify, make_response, redirect, render_template, request, url_for

from todo_app.actions import handle
from todo_app.config import DEFAULT_SECRET_KEY, Config
from todo_app.errors import TodoError
from todo_app.models import Task, Theme, View
from todo_app.pending import PendingTable
from todo_app.presentation import PageContext
from todo_app.repository import TaskRepository
from todo_app.storage import JsonStorage
from todo_app.views import filter_tasks

logger = logging.getLogger(__name__)

THEME_COOKIE = "theme"
THEME_COOKIE_MAX_AGE = 60 * 60 * 24 * 365


def wants_json() -> bool:
    """Whether the client asked for JSON rather than a page."""
    return request.accept_mimetypes.best_match(["text/html", "application/json"]) == "application/json"


def current_view() -> View:
    return View.parse(request.args.get("view"))


def current_theme() -> Theme:
    return Theme.parse(request.cookies.get(THEME_COOKIE))


def create_app(config: Optional[Config] = None, repo: Optional[TaskRepository] = None) -> Flask:
    """Create the Flask application.

    Args:
        config: Settings to use. If None, read from the environment.
        repo: Task store to use. If None, a JsonStorage-backed repository
              at config.db_path.

    Returns:
        Configured Flask app
    """
    config = config or Config.from_env()
    repo = repo or TaskRepository(JsonStorage(config.db_path))

    pending = PendingTable()

    if config.secret_key == DEFAULT_SECRET_KEY and not config.debug:
        logger.warning("TODO_SECRET_KEY is not set; using the insecure development key")

    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.secret_key
    app.config["DEBUG"] = config.debug
    app.extensions["todo_repo"] = repo
    app.extensions["todo_pending"] = pending

    @app.errorhandler(TodoError)
    def handle_todo_error(error: TodoError):
        if wants_json():
            return jsonify({"error": error.message}), error.status_code
        return error.message, error.status_code, {"Content-Type": "text/plain; charset=utf-8"}

    @app.get("/")
    def index():
        page = PageContext(
            tasks=repo.read_all(), view=current_view(), theme=current_theme(), pending=pending.state()
        )
        response = make_response(render_template("index.html", **page.template_vars()))
        response.headers["Vary"] = "Cookie"
        return response

    @app.post("/")
    def submit():
        form = request.form.to_dict()
        with pending.track(form):
            result = handle(repo, form)

        if wants_json():
            if isinstance(result, Task):
                return jsonify(result.to_dict())
            return "", 204
        return redirect(url_for("index", view=current_view().value), code=303)

    @app.get("/api/tasks")
    def list_tasks():
        tasks = repo.read_all()
        if "view" in request.args:
            tasks = filter_tasks(tasks, current_view())
        return jsonify([task.to_dict() for task in tasks])

    @app.post("/theme")
    def set_theme():
        theme = Theme.parse(request.form.get("theme"))
        target = request.form.get("next") or url_for("index")
        # Only redirect within this site
        if not target.startswith("/") or target.startswith("//"):
            target = url_for("index")

        response = redirect(target, code=303)
        response.set_cookie(
            THEME_COOKIE, theme.value, max_age=THEME_COOKIE_MAX_AGE, httponly=True, samesite="Lax"
        )
        return response

    logger.debug("App created with store at %s", getattr(repo.storage, "file_path", repo.storage))
    return app
