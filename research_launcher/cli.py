"""research-cli launcher entry point.

Finds the research-cli Node.js module, then runs it under ``node`` with
every argument forwarded. The launcher has no flags of its own.

Usage:
    research-cli [ARGS...]
    python -m research_launcher [ARGS...]
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from research_launcher.config import (
    MIN_NODE_VERSION,
    OVERRIDE_ENV_VAR,
    PRODUCT_NAME,
    PROJECT_URL,
    VERSION_CHECK_TIMEOUT,
    LauncherSettings,
    load_settings,
)
from research_launcher.delegate import build_launch_spec, check_interpreter, execute
from research_launcher.infer import infer_install_root
from research_launcher.models import CLIModuleNotFound, InterpreterUnavailable, StartupFailure
from research_launcher.search import context_from_settings, resolve_module

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1


def configure_logging(level: str = "WARNING") -> None:
    """Send launcher diagnostics to stderr; stdout belongs to the delegate."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _err(line: str = "") -> None:
    print(line, file=sys.stderr)


def report_not_found(exc: CLIModuleNotFound) -> None:
    _err("Error: Research CLI module not found!")
    _err()
    _err("Searched:")
    for path in exc.searched:
        _err(f"  {path}")
    _err()
    _err("To fix this, do one of the following:")
    _err(f"  1. Point {OVERRIDE_ENV_VAR} at an existing installation:")
    _err(f"       export {OVERRIDE_ENV_VAR}=/path/to/{PRODUCT_NAME}")
    _err("  2. Build from source:")
    _err(f"       git clone {PROJECT_URL}.git")
    _err(f"       cd {PRODUCT_NAME} && npm ci && npm run build")
    _err(f"       export {OVERRIDE_ENV_VAR}=$PWD")
    _err("  3. Run the installer:")
    _err(f"       curl -sSL {PROJECT_URL}/releases/latest/download/install.sh | bash")
    _err(f"  4. Install manually by copying the built tree to /usr/local/lib/{PRODUCT_NAME}")
    _err(f"     or ~/.local/lib/{PRODUCT_NAME}")
    _err()
    _err("For installation instructions, visit:")
    _err(PROJECT_URL)


def report_interpreter_unavailable(exc: InterpreterUnavailable) -> None:
    _err(f"Error: Node.js is required to run Research CLI ({exc.command}: {exc.reason}).")
    _err()
    _err(f"Install Node.js {exc.minimum} or newer from https://nodejs.org/")
    _err("and make sure the `node` command is on your PATH.")
    _err("Set RESEARCH_CLI_NODE to use a Node.js binary outside PATH.")


def report_startup_failure(exc: StartupFailure) -> None:
    _err(f"Failed to start Research CLI: {exc.cause}")
    _err("Make sure Node.js is installed and available in PATH.")


def run(args: list[str], settings: Optional[LauncherSettings] = None) -> int:
    """Resolve, infer, pre-check and delegate. Returns the exit code."""
    if settings is None:
        settings = load_settings()

    try:
        resolved = resolve_module(context_from_settings(settings))
    except CLIModuleNotFound as e:
        report_not_found(e)
        return EXIT_FAILURE

    inferred_root = None
    if not settings.override_set:
        inferred_root = infer_install_root(resolved.path)

    try:
        check_interpreter(
            settings.node_binary,
            minimum=MIN_NODE_VERSION,
            timeout=VERSION_CHECK_TIMEOUT,
        )
    except InterpreterUnavailable as e:
        report_interpreter_unavailable(e)
        return EXIT_FAILURE

    spec = build_launch_spec(settings, resolved, args, inferred_root=inferred_root)
    try:
        return execute(spec)
    except StartupFailure as e:
        report_startup_failure(e)
        return EXIT_FAILURE


def main(argv: Optional[list[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    settings = load_settings()
    configure_logging(settings.log_level)
    return run(list(argv), settings)


if __name__ == "__main__":
    sys.exit(main())
