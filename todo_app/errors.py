"""Error types for todo-app.

Every failed request is reported through one of these exceptions:
- ValidationError: a payload field is missing, malformed or blank
- NotFoundError: no task exists with the requested ID
- UnknownIntentError: the submitted intent is not one the app handles
"""


class TodoError(Exception):
    """Base class for request failures.

    Attributes:
        message: Human-readable description of the failure
        status_code: HTTP status the web layer answers with
    """

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TodoError):
    """Raised when a payload field is missing, malformed or blank."""

    status_code = 400


class NotFoundError(TodoError):
    """Raised when a task ID does not exist in the store."""

    status_code = 404

    def __init__(self, task_id: int):
        super().__init__(f"Task #{task_id} not found.")
        self.task_id = task_id


class UnknownIntentError(TodoError):
    """Raised for an unrecognized or missing intent."""

    status_code = 400

    def __init__(self, intent: object):
        super().__init__("Unknown intent")
        self.intent = intent
