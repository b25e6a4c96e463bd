"""Launcher test configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

LAUNCHER_ENV_VARS = (
    "RESEARCH_CLI_HOME",
    "RESEARCH_CLI_NODE",
    "RESEARCH_CLI_LOG_LEVEL",
    "APPDATA",
)


@pytest.fixture(autouse=True)
def clean_launcher_env(monkeypatch):
    """Start every test without launcher variables from the developer's shell."""
    for name in LAUNCHER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_module():
    """Create ``root/suffix`` (with parents) and return its path."""

    def _make(root: Path, suffix: str, body: str = "") -> Path:
        path = Path(root) / suffix
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
        return path

    return _make


@pytest.fixture
def isolated_search(monkeypatch, tmp_path):
    """Point every search tier at an empty sandbox under tmp_path.

    Returns the sandbox's fake launcher executable path.
    """
    from research_launcher import search

    exe = tmp_path / "sandbox" / "bin" / "research-cli"
    exe.parent.mkdir(parents=True)
    exe.write_text("", encoding="utf-8")

    monkeypatch.setattr(search, "SYSTEM_ROOTS", [tmp_path / "sandbox" / "usr-local-lib" / "research-cli"])
    monkeypatch.setattr(search, "current_executable", lambda: exe)
    monkeypatch.setenv("HOME", str(tmp_path / "sandbox" / "home"))
    return exe


@pytest.fixture
def python_delegate(monkeypatch):
    """Use the running Python as the "node" interpreter for real child runs."""
    monkeypatch.setenv("RESEARCH_CLI_NODE", sys.executable)
    return sys.executable
