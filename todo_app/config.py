"""Configuration for todo-app, read from environment variables."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

TRUTHY = {"1", "true", "yes", "on"}

DEFAULT_SECRET_KEY = "dev"


@dataclass(frozen=True)
class Config:
    """Runtime settings.

    Attributes:
        db_path: JSON file holding the tasks (TODO_DB_PATH)
        host: Address the web server binds to (TODO_HOST)
        port: Port the web server listens on (TODO_PORT)
        debug: Run Flask in debug mode (TODO_DEBUG)
        log_level: Root log level name (TODO_LOG_LEVEL)
        secret_key: Flask secret key (TODO_SECRET_KEY)
    """

    db_path: str = "todos.json"
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False
    log_level: str = "INFO"
    secret_key: str = DEFAULT_SECRET_KEY

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build a Config from environment variables.

        Raises:
            ValueError: If TODO_PORT is not an integer
        """
        env = os.environ if environ is None else environ

        raw_port = env.get("TODO_PORT", str(cls.port))
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"TODO_PORT must be an integer, got {raw_port!r}") from None

        return cls(
            db_path=env.get("TODO_DB_PATH", cls.db_path),
            host=env.get("TODO_HOST", cls.host),
            port=port,
            debug=env.get("TODO_DEBUG", "").lower() in TRUTHY,
            log_level=env.get("TODO_LOG_LEVEL", cls.log_level).upper(),
            secret_key=env.get("TODO_SECRET_KEY", cls.secret_key),
        )
