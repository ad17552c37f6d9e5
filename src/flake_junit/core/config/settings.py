"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from flake_junit.core.config.loader import ConfigLoader


class NixSettings(BaseSettings):
    """Settings for invoking the nix executable."""

    model_config = SettingsConfigDict(
        env_prefix="FLAKE_JUNIT_NIX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    binary: str = Field(
        default="nix",
        description="nix executable name or path",
    )
    max_jobs: int | None = Field(
        default=None,
        ge=1,
        description="Value passed to nix build --max-jobs",
    )

    @field_validator("binary", mode="before")
    @classmethod
    def validate_binary(cls, v: str | None) -> str:
        """Fall back to the default executable on empty values."""
        if v is None or v == "":
            return "nix"
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="FLAKE_JUNIT_LOGGING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = Field(
        default="INFO",
        description="Log level",
    )
    format: str = Field(
        default="[%(name)s] %(message)s",
        description="Log format string",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path",
    )
    use_rich: bool = Field(
        default=True,
        description="Use Rich console for output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: object) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if not isinstance(v, str):
            raise ValueError(f"Invalid log level: {v!r}. Must be one of {valid_levels}")
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("file", mode="before")
    @classmethod
    def validate_file(cls, v: object) -> object:
        """Treat an empty file setting as no log file."""
        if v is None or v == "":
            return None
        return v


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="FLAKE_JUNIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    nix: NixSettings = Field(default_factory=NixSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file.

        Values from the file take precedence over environment variables.

        Args:
            path: Path to YAML configuration file.

        Returns:
            Settings instance with values from YAML.
        """
        loader = ConfigLoader(path)
        loader.load()

        return cls(
            nix=NixSettings(**loader.get_section("nix")),
            logging=LoggingSettings(**loader.get_section("logging")),
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings singleton.
    """
    # Environment variables and .env are automatically loaded by pydantic-settings
    return Settings()
