"""Centralized configuration management using Pydantic Settings."""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Defines application settings, loaded from environment variables or .env file.

    Attributes
    ----------
    default_time_name : str
        Name of the time column when a time series does not set one.
    archive_cache_enabled : bool
        Keep decoded archives in memory for the rest of the run.
    definitions_dirs : list of str
        Directories searched for relative run configuration paths.
    verbosity : str
        Initial log level (INFO, VERBOSE, DEBUG or SPAM).
    log_format : str
        The log record format.
    """

    default_time_name: str = "time"
    archive_cache_enabled: bool = True
    definitions_dirs: List[str] = ["."]

    verbosity: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    model_config = SettingsConfigDict(
        env_prefix="POST_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )
