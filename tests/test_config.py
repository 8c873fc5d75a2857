"""Tests for Config."""

import pytest

from todo_app.config import Config


class TestConfig:
    def test_defaults(self):
        config = Config.from_env({})
        assert config == Config()
        assert config.db_path == "todos.json"
        assert config.port == 5000
        assert config.debug is False

    def test_from_env(self):
        config = Config.from_env(
            {
                "TODO_DB_PATH": "/tmp/x.json",
                "TODO_HOST": "0.0.0.0",
                "TODO_PORT": "8080",
                "TODO_DEBUG": "true",
                "TODO_LOG_LEVEL": "debug",
                "TODO_SECRET_KEY": "s3cret",
            }
        )
        assert config.db_path == "/tmp/x.json"
        assert config.host == "0.0.0.0"
        assert config.port == 8080
        assert config.debug is True
        assert config.log_level == "DEBUG"
        assert config.secret_key == "s3cret"

    def test_invalid_port(self):
        with pytest.raises(ValueError, match="TODO_PORT"):
            Config.from_env({"TODO_PORT": "http"})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("TODO_PORT", "9000")
        assert Config.from_env().port == 9000
