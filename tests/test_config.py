"""
Tests for configuration, logging setup and exceptions.
"""

import logging

import pytest


class TestStoreSettings:
    """Store settings tests."""

    def test_defaults(self):
        """Test default settings."""
        from flatstore.config import StoreSettings

        settings = StoreSettings()
        assert settings.encoding == "utf-8"
        assert settings.indent is None
        assert settings.ensure_ascii is False
        assert settings.atomic_write is True
        assert settings.log_level == "INFO"

    def test_env_override(self, monkeypatch):
        """Test FLATSTORE_ environment variables."""
        from flatstore.config import StoreSettings

        monkeypatch.setenv("FLATSTORE_INDENT", "4")
        monkeypatch.setenv("FLATSTORE_ATOMIC_WRITE", "false")

        settings = StoreSettings()
        assert settings.indent == 4
        assert settings.atomic_write is False

    def test_negative_indent_rejected(self):
        """Test validation of indent."""
        from pydantic import ValidationError

        from flatstore.config import StoreSettings

        with pytest.raises(ValidationError):
            StoreSettings(indent=-1)

    def test_get_settings_cached(self):
        """Test settings singleton."""
        from flatstore.config import get_settings

        assert get_settings() is get_settings()


class TestConfigureLogging:
    """Logging setup tests."""

    def test_sets_package_level(self):
        from flatstore.config import StoreSettings
        from flatstore.log import configure_logging

        logger = configure_logging(StoreSettings(log_level="debug"))
        assert logger.name == "flatstore"
        assert logger.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        from flatstore.config import StoreSettings
        from flatstore.log import configure_logging

        logger = configure_logging(StoreSettings(log_level="chatty"))
        assert logger.level == logging.INFO


class TestExceptions:
    """Exception tests."""

    def test_invalid_path(self):
        from flatstore.exceptions import InvalidPathError

        exc = InvalidPathError()
        assert exc.code == "INVALID_PATH"
        assert exc.message == "Filename can not be empty"

    def test_file_not_found(self):
        from flatstore.exceptions import FlatStoreException, StoreFileNotFoundError

        exc = StoreFileNotFoundError("/tmp/db.json")
        assert isinstance(exc, FlatStoreException)
        assert isinstance(exc, FileNotFoundError)
        assert exc.filename == "/tmp/db.json"
        assert exc.details["path"] == "/tmp/db.json"

    def test_unknown_table(self):
        from flatstore.exceptions import UnknownTableError

        exc = UnknownTableError(3)
        assert exc.code == "UNKNOWN_TABLE"
        assert "3" in exc.message
        assert exc.details["table"] == 3

    def test_no_match(self):
        from flatstore.exceptions import NoMatchError

        exc = NoMatchError(0, "id", 99)
        assert exc.code == "NO_MATCH"
        assert exc.details == {"table": 0, "key": "id", "value": 99}

    def test_load_and_persist(self):
        from flatstore.exceptions import LoadError, PersistError

        load = LoadError("db.json", "Expecting value")
        persist = PersistError("db.json", "No space left on device")
        assert load.code == "LOAD_FAILED"
        assert "Expecting value" in load.message
        assert persist.code == "PERSIST_FAILED"
        assert persist.details["reason"] == "No space left on device"
