# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides default directories, language, logging settings and per-category scan tuning

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from voiceline_extractor.core.models import DEFAULT_LANGUAGE
from voiceline_extractor.core.tuning import (
    FlatScanTuning,
    NestedScanTuning,
    default_battle_tuning,
    default_mahjong_tuning,
)


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="VOICELINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Extraction defaults
    game_directory: Path | None = Field(default=None, description="Game installation directory")
    out_directory: Path = Field(default=Path("."), description="Root directory for extracted voice lines")
    default_language: str = Field(default=DEFAULT_LANGUAGE, description="Language used when none is selected")

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")

    # Scan tuning
    battle: FlatScanTuning = Field(default_factory=default_battle_tuning, description="Battle voice line scan")
    mahjong: FlatScanTuning = Field(default_factory=default_mahjong_tuning, description="Mahjong voice line scan")
    cutscene: NestedScanTuning = Field(default_factory=NestedScanTuning, description="Cutscene voice line scan")


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
