"""Tests for settings loading, logging setup and service wiring."""

import json
import logging
import sys

import pytest
import structlog

from todoapp.application import CreateTodoRequest
from todoapp.bootstrap import build_repository, build_service
from todoapp.config import Settings, get_config_dir, get_settings, save_settings
from todoapp.infrastructure.storage import InMemoryTodoRepository, JsonTodoRepository
from todoapp.logging_setup import configure_logging, json_formatter


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    path = tmp_path / "config"
    monkeypatch.setenv("TODOAPP_CONFIG_DIR", str(path))
    for name in Settings.model_fields:
        monkeypatch.delenv(f"TODOAPP_{name.upper()}", raising=False)
    return path


class TestSettings:
    def test_defaults_when_no_file(self, config_dir):
        settings = get_settings()
        assert settings.storage == "json"
        assert settings.port == 8090
        assert not settings.is_production
        assert config_dir.is_dir()

    def test_save_and_reload(self, config_dir):
        save_settings(Settings(storage="memory", port=9000))
        assert json.loads((config_dir / "config.json").read_text())["port"] == 9000

        loaded = get_settings()
        assert loaded.storage == "memory"
        assert loaded.port == 9000

    def test_environment_overrides_file(self, config_dir, monkeypatch):
        save_settings(Settings(port=9000))
        monkeypatch.setenv("TODOAPP_PORT", "9100")
        monkeypatch.setenv("TODOAPP_ENVIRONMENT", "production")

        settings = get_settings()
        assert settings.port == 9100
        assert settings.is_production

    def test_unreadable_file_falls_back_to_defaults(self, config_dir):
        get_config_dir()
        (config_dir / "config.json").write_text("{broken")
        assert get_settings() == Settings()

    def test_invalid_values_fall_back_to_defaults(self, config_dir, monkeypatch, caplog):
        monkeypatch.setenv("TODOAPP_STORAGE", "postgres")
        with caplog.at_level(logging.WARNING, logger="todoapp.config"):
            settings = get_settings()
        assert settings.storage == "json"
        assert "Invalid settings" in caplog.text

    def test_environment_beats_keyword_values(self, config_dir, monkeypatch):
        monkeypatch.setenv("TODOAPP_PORT", "9200")
        monkeypatch.setenv("TODOAPP_STORAGE", "memory")

        settings = Settings(port=9000, host="0.0.0.0")
        assert settings.port == 9200
        assert settings.storage == "memory"
        assert settings.host == "0.0.0.0"

    def test_empty_environment_value_is_ignored(self, config_dir, monkeypatch):
        save_settings(Settings(log_level="DEBUG"))
        monkeypatch.setenv("TODOAPP_LOG_LEVEL", "")
        assert get_settings().log_level == "DEBUG"

    def test_unknown_keys_in_file_are_ignored(self, config_dir):
        get_config_dir()
        (config_dir / "config.json").write_text(json.dumps({"port": 9300, "theme": "dark"}))
        assert get_settings().port == 9300

    def test_non_object_file_falls_back_to_defaults(self, config_dir):
        get_config_dir()
        (config_dir / "config.json").write_text("[1, 2]")
        assert get_settings() == Settings()


class TestBootstrap:
    def test_memory_storage(self):
        assert isinstance(build_repository(Settings(storage="memory")), InMemoryTodoRepository)

    def test_json_storage_uses_data_dir(self, tmp_path):
        repository = build_repository(Settings(data_dir=str(tmp_path)))
        assert isinstance(repository, JsonTodoRepository)
        assert repository.path.parent == tmp_path

    async def test_built_service_is_usable(self, tmp_path):
        service = build_service(Settings(data_dir=str(tmp_path)))
        result = await service.create_todo(CreateTodoRequest(title="Wired up"))
        assert result.value.title == "Wired up"
        assert (tmp_path / "todos.json").exists()


class TestLogging:
    def test_json_lines_include_extra_fields(self):
        record = logging.LogRecord(
            "todoapp.test", logging.INFO, __file__, 1, "domain event dispatched", None, None
        )
        record.event_type = "TodoCreated"
        record.event_data = {"title": "Buy groceries"}

        payload = json.loads(json_formatter().format(record))
        assert payload["event"] == "domain event dispatched"
        assert payload["level"] == "info"
        assert payload["logger"] == "todoapp.test"
        assert payload["event_type"] == "TodoCreated"
        assert payload["event_data"] == {"title": "Buy groceries"}
        assert "timestamp" in payload
        assert "lineno" not in payload
        assert "_record" not in payload

    def test_json_lines_render_exceptions(self):
        try:
            raise RuntimeError("disk full")
        except RuntimeError:
            record = logging.LogRecord(
                "todoapp.test", logging.ERROR, __file__, 1, "write failed", None, sys.exc_info()
            )

        payload = json.loads(json_formatter().format(record))
        assert payload["level"] == "error"
        assert "RuntimeError: disk full" in payload["exception"]

    def test_configure_logging_replaces_its_handler(self):
        root = logging.getLogger()
        configure_logging("debug")
        configure_logging("warning", json_format=True)

        ours = [h for h in root.handlers if getattr(h, "_todoapp_handler", False)]
        assert len(ours) == 1
        assert isinstance(ours[0].formatter, structlog.stdlib.ProcessorFormatter)
        assert root.level == logging.WARNING
