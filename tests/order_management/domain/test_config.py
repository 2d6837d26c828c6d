"""Tests for environment-driven settings."""

import logging
import logging.handlers

import pytest
from order_management.config import Settings
from order_management.utils.logging import LOG_FILE_NAME, configure_logging, get_log_level


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in (
            "ANALYTICS_CACHE_TTL_SECONDS",
            "ORDERS_DEFAULT_PAGE_SIZE",
            "ORDERS_MAX_PAGE_SIZE",
            "ORDERS_BULK_THRESHOLD",
            "ORDERS_SEED_ON_STARTUP",
        ):
            monkeypatch.delenv(name, raising=False)

        assert Settings.from_env() == Settings()
        assert Settings().analytics_cache_ttl_seconds == 300

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("ANALYTICS_CACHE_TTL_SECONDS", "60")
        monkeypatch.setenv("ORDERS_MAX_PAGE_SIZE", "50")
        monkeypatch.setenv("ORDERS_BULK_THRESHOLD", "5")
        monkeypatch.setenv("ORDERS_SEED_ON_STARTUP", "no")

        settings = Settings.from_env()

        assert settings.analytics_cache_ttl_seconds == 60
        assert settings.max_page_size == 50
        assert settings.bulk_order_threshold == 5
        assert settings.seed_on_startup is False

    def test_blank_values_fall_back_to_defaults(self, monkeypatch):
        monkeypatch.setenv("ORDERS_DEFAULT_PAGE_SIZE", " ")
        assert Settings.from_env().default_page_size == 10

    def test_non_integer_is_rejected(self, monkeypatch):
        monkeypatch.setenv("ORDERS_MAX_PAGE_SIZE", "lots")
        with pytest.raises(ValueError, match="ORDERS_MAX_PAGE_SIZE"):
            Settings.from_env()


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


class TestLogging:
    @pytest.mark.parametrize(
        "env, level",
        [("production", "INFO"), ("staging", "INFO"), ("development", "DEBUG"), ("test", "WARNING"), ("other", "INFO")],
    )
    def test_level_follows_environment(self, monkeypatch, env, level):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", env)
        assert get_log_level() == level

    def test_log_level_variable_wins(self, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "test")
        monkeypatch.setenv("LOG_LEVEL", "error")
        assert get_log_level() == "ERROR"

    def test_stdout_only_without_log_dir(self, monkeypatch, restore_root_logger):
        monkeypatch.delenv("LOG_DIR", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", "test")

        configure_logging()

        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0], logging.StreamHandler)
        assert restore_root_logger.level == logging.WARNING

    def test_log_dir_adds_rotating_file(self, monkeypatch, tmp_path, restore_root_logger):
        monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))

        configure_logging()

        file_handlers = [
            h for h in restore_root_logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert file_handlers[0].baseFilename == str(tmp_path / "logs" / LOG_FILE_NAME)
