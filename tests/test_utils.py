"""Tests for settings and logging helpers."""

import json
import logging

import pytest

from article_store import ConfigError
from article_store.utils.logging import configure_logging, get_logger
from article_store.utils.settings import StoreSettings


class TestStoreSettings:
    def test_defaults(self, monkeypatch):
        for name in ("ARTICLE_ARCHIVE_WITHDRAWN", "ARTICLE_KEY_STRIDE", "ARTICLE_READING_WPM", "ARTICLE_CONTENT_ROOT"):
            monkeypatch.delenv(name, raising=False)
        settings = StoreSettings()
        assert settings.archive_withdrawn is False
        assert settings.key_stride == 10
        assert settings.reading_wpm == 200
        assert settings.content_root.name == "articles"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ARTICLE_ARCHIVE_WITHDRAWN", "yes")
        monkeypatch.setenv("ARTICLE_KEY_STRIDE", "100")
        monkeypatch.setenv("ARTICLE_READING_WPM", "250")
        settings = StoreSettings()
        assert settings.archive_withdrawn is True
        assert settings.key_stride == 100
        assert settings.reading_wpm == 250

    @pytest.mark.parametrize("value", ["0", "-5", "ten", "2.5"])
    def test_invalid_stride_from_environment(self, monkeypatch, value):
        monkeypatch.setenv("ARTICLE_KEY_STRIDE", value)
        with pytest.raises(ConfigError, match="ARTICLE_KEY_STRIDE|key_stride"):
            StoreSettings()

    def test_invalid_explicit_values(self):
        with pytest.raises(ConfigError, match="reading_wpm"):
            StoreSettings(reading_wpm=0)
        with pytest.raises(ConfigError, match="key_stride"):
            StoreSettings(key_stride=True)


class TestConfigureLogging:
    def test_file_output(self, tmp_path):
        log_file = tmp_path / "logs" / "store.log"
        configure_logging(level="DEBUG", output="file", file_path=str(log_file), log_format="json")
        get_logger("article_store.test").debug("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert '"message": "hello"' in log_file.read_text(encoding="utf-8")

    def test_stream_output(self):
        configure_logging(level="warning", output="stderr")
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1

    def test_json_lines_escape_quotes(self, tmp_path):
        log_file = tmp_path / "store.log"
        configure_logging(level="INFO", output="file", file_path=str(log_file), log_format="json")
        get_logger("article_store.test").info('Loaded "quoted" slug\nsecond line')
        for handler in logging.getLogger().handlers:
            handler.flush()
        (line,) = log_file.read_text(encoding="utf-8").splitlines()
        record = json.loads(line)
        assert record["message"] == 'Loaded "quoted" slug\nsecond line'
        assert record["level"] == "INFO"
        assert record["name"] == "article_store.test"
