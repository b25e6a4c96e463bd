"""Launcher Pydantic v2 data models."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ── Custom Exceptions ──────────────────────────────────────────────

class LauncherError(Exception):
    """Base class for failures the launcher reports itself."""
    pass


class CLIModuleNotFound(LauncherError):
    """Raised when no search tier produced an existing module path."""

    def __init__(self, searched: list[Path]):
        self.searched = list(searched)
        super().__init__(
            f"research-cli module not found ({len(self.searched)} locations searched)"
        )


class InterpreterUnavailable(LauncherError):
    """Raised when the interpreter version pre-check fails."""

    def __init__(self, command: str, reason: str, minimum: str):
        self.command = command
        self.reason = reason
        self.minimum = minimum
        super().__init__(f"{command} is not available: {reason}")


class StartupFailure(LauncherError):
    """Raised when spawning the interpreter fails after a passing pre-check."""

    def __init__(self, command: list[str], cause: OSError):
        self.command = list(command)
        self.cause = cause
        super().__init__(f"Failed to start {command[0]}: {cause}")


# ── Search Models ──────────────────────────────────────────────────────

class SearchTier(BaseModel):
    """One ordered search rule: candidate roots crossed with relative suffixes."""
    model_config = ConfigDict(frozen=True)

    name: str
    roots: list[Path] = Field(default_factory=list)
    suffixes: list[str] = Field(default_factory=list)


class SearchContext(BaseModel):
    """Inputs the search tiers read; everything else is constant."""
    model_config = ConfigDict(frozen=True)

    override_root: Optional[Path] = None
    executable: Optional[Path] = None
    home: Optional[Path] = None
    appdata: Optional[Path] = None
    platform: str = "linux"


class ResolvedModule(BaseModel):
    """The single module path chosen for this run."""
    model_config = ConfigDict(frozen=True)

    path: Path
    tier: str
    root: Path


# ── Delegation Models ──────────────────────────────────────────────────

class InterpreterInfo(BaseModel):
    """Result of the interpreter version pre-check."""
    command: str
    version: str = ""
    version_tuple: tuple[int, ...] = ()
    meets_minimum: bool = False


class LaunchSpec(BaseModel):
    """Everything needed to spawn the delegate once."""
    model_config = ConfigDict(frozen=True)

    interpreter: str
    module_path: Path
    args: list[str] = Field(default_factory=list)
    env: Optional[dict[str, str]] = None  # None inherits the launcher's environment
    inferred_home: Optional[Path] = None

    @property
    def command(self) -> list[str]:
        return [self.interpreter, str(self.module_path), *self.args]


class CommandResult(BaseModel):
    """Captured output of a non-interactive delegate run."""
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0

    @property
    def ok(self) -> bool:
        return self.exit_code == 0
