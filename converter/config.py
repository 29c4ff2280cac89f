"""
Configuration and logging setup for the planner exporter.

Settings are read from environment variables prefixed with
``PLANNER_EXPORT_`` (or a local ``.env`` file) and can be overridden at
runtime, e.g. by CLI options:

    PLANNER_EXPORT_OUTPUT_PATH=public/course-data-constructed.json
    PLANNER_EXPORT_INDENT=2
    PLANNER_EXPORT_JSON_LOGS=true
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_OUTPUT_PATH = Path("course-data-constructed.json")


class ExportSettings(BaseSettings):
    """Runtime settings for a planner export."""

    model_config = SettingsConfigDict(
        env_prefix="PLANNER_EXPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    output_path: Path = Field(
        default=DEFAULT_OUTPUT_PATH,
        description="Where the planner document is written",
    )
    indent: Optional[int] = Field(
        default=None,
        ge=0,
        le=8,
        description="JSON indentation; None writes compact single-line JSON",
    )
    create_parent_dirs: bool = Field(
        default=False,
        description="Create the destination directory if it does not exist",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    json_logs: bool = Field(default=False, description="Render log events as JSON")


@lru_cache
def get_settings() -> ExportSettings:
    """Get cached settings instance."""
    return ExportSettings()


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configure structlog for console or JSON output.

    Args:
        level: Minimum log level name
        json_logs: Render events as JSON lines instead of the console renderer
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        cache_logger_on_first_use=False,
    )
