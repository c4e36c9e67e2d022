"""
Application configuration using Pydantic Settings.

Loads configuration from DOCGUARD_* environment variables and .env file.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="DOCGUARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = Field(default="development", description="Environment (development/production)")
    log_level: str = Field(default="INFO", description="Logging level")

    # Workspace boundary
    workspace_root: str | None = Field(
        default=None,
        description="Outer trust boundary used when the host registers none",
    )
    check_within_workspace: bool = Field(
        default=False,
        description="Default for ValidationOptions.check_within_workspace",
    )

    # Session storage (referenced in remediation hints)
    session_dir_name: str = Field(
        default=".session-log",
        description="Directory holding the stored project-root reference",
    )

    # Logging / Privacy
    log_redaction_enabled: bool = Field(default=True, description="Enable PII redaction in logs")

    @field_validator("workspace_root", mode="before")
    @classmethod
    def _blank_workspace_root_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env.lower() == "production"


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return settings
