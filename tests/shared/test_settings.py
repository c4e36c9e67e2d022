"""Tests for environment-driven settings."""

from docguard.shared.infrastructure.config import Settings, get_settings, settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("DOCGUARD_WORKSPACE_ROOT", "DOCGUARD_CHECK_WITHIN_WORKSPACE", "DOCGUARD_APP_ENV"):
            monkeypatch.delenv(var, raising=False)
        config = Settings(_env_file=None)
        assert config.workspace_root is None
        assert config.check_within_workspace is False
        assert config.session_dir_name == ".session-log"
        assert config.is_development

    def test_env_prefix(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DOCGUARD_WORKSPACE_ROOT", str(tmp_path))
        monkeypatch.setenv("DOCGUARD_CHECK_WITHIN_WORKSPACE", "true")
        monkeypatch.setenv("DOCGUARD_APP_ENV", "production")
        config = Settings(_env_file=None)
        assert config.workspace_root == str(tmp_path)
        assert config.check_within_workspace is True
        assert config.is_production

    def test_env_file(self, monkeypatch, tmp_path):
        monkeypatch.delenv("DOCGUARD_WORKSPACE_ROOT", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("DOCGUARD_WORKSPACE_ROOT=/srv/workspace\n")
        assert Settings(_env_file=env_file).workspace_root == "/srv/workspace"

    def test_get_settings_is_global_instance(self):
        assert get_settings() is settings
