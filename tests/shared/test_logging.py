"""Tests for structured logging and log redaction."""

import io
import json

import pytest
import structlog

from docguard.shared.infrastructure import logging as docguard_logging
from docguard.shared.infrastructure.config import settings


@pytest.fixture
def restore_structlog():
    yield
    structlog.reset_defaults()


class TestPrivacyRedactor:
    def test_home_directories_redacted(self):
        event = docguard_logging.privacy_redactor(
            None, "warning", {"event": "path_escape_blocked", "path": "/home/alice/ws/../../etc"}
        )
        assert "alice" not in event["path"]
        assert "[HOME_REDACTED]" in event["path"]

    def test_nested_values_redacted(self):
        event = docguard_logging.privacy_redactor(
            None, "info", {"details": {"token": "token=abc123"}, "paths": ["/Users/bob/x"]}
        )
        assert "abc123" not in event["details"]["token"]
        assert event["paths"] == ["[HOME_REDACTED]/x"]

    def test_disabled_by_setting(self, monkeypatch):
        monkeypatch.setattr(settings, "log_redaction_enabled", False)
        event = {"path": "/home/alice/project"}
        assert docguard_logging.privacy_redactor(None, "info", event) == event


class TestConfigureLogging:
    def test_production_renders_json(self, monkeypatch, restore_structlog):
        monkeypatch.setattr(settings, "app_env", "production")
        stream = io.StringIO()
        docguard_logging.configure_logging(stream=stream)

        docguard_logging.get_logger("docguard.test").warning(
            "path_escape_blocked", code="PATH_ESCAPE", path="/home/alice/x"
        )

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "path_escape_blocked"
        assert record["code"] == "PATH_ESCAPE"
        assert record["level"] == "warning"
        assert record["path"] == "[HOME_REDACTED]/x"

    def test_development_renders_console(self, monkeypatch, restore_structlog):
        monkeypatch.setattr(settings, "app_env", "development")
        stream = io.StringIO()
        docguard_logging.configure_logging(stream=stream)

        docguard_logging.get_logger("docguard.test").info("base_dir_validated", base_dir="/srv/p")

        output = stream.getvalue()
        assert "base_dir_validated" in output
        assert "/srv/p" in output
