"""Launcher configuration, read from the caller's environment."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Product identity ---
PRODUCT_NAME = "research-cli"
OVERRIDE_ENV_VAR = "RESEARCH_CLI_HOME"
PROJECT_URL = "https://github.com/iechor-research/research-cli"
MIN_NODE_VERSION = "20.0.0"
VERSION_CHECK_TIMEOUT = 10.0
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class LauncherSettings(BaseSettings):
    """Environment-driven settings for one launcher run."""

    # No env_file: the launcher must see exactly what the caller exported.
    # Fields answer only to their aliases, never to bare field names.
    model_config = SettingsConfigDict(
        extra="ignore",
    )

    # --- Search inputs ---
    research_cli_home: Optional[Path] = Field(default=None, alias=OVERRIDE_ENV_VAR)
    home: Optional[Path] = Field(default=None, alias="HOME")
    appdata: Optional[Path] = Field(default=None, alias="APPDATA")

    # --- Interpreter ---
    node_binary: str = Field(default="node", alias="RESEARCH_CLI_NODE")

    # --- Diagnostics ---
    log_level: str = Field(default="WARNING", alias="RESEARCH_CLI_LOG_LEVEL")

    @field_validator("research_cli_home", "home", "appdata", mode="before")
    @classmethod
    def _blank_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("node_binary", mode="before")
    @classmethod
    def _default_node(cls, value):
        if isinstance(value, str) and not value.strip():
            return "node"
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value):
        if isinstance(value, str):
            level = value.strip().upper()
            return level if level in LOG_LEVELS else "WARNING"
        return "WARNING"

    @model_validator(mode="after")
    def _resolve_home(self):
        if self.home is None:
            try:
                self.home = Path.home()
            except RuntimeError:
                # No HOME and no password entry: the user tier is skipped.
                self.home = None
        return self

    @property
    def override_set(self) -> bool:
        """Return True if the caller exported a non-empty override root."""
        return self.research_cli_home is not None


def load_settings() -> LauncherSettings:
    """Build settings from the current process environment."""
    return LauncherSettings()
