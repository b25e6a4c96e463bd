"""Run the research-cli module under Node.js and pass its exit status through.

The version pre-check captures output; the delegated run does not. The
child inherits stdin, stdout and stderr directly so interactive prompts
and streaming output reach the terminal untouched.
"""

from __future__ import annotations

import logging
import os
import re
import signal
import subprocess
import sys
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Mapping, Optional

from research_launcher.config import OVERRIDE_ENV_VAR, LauncherSettings
from research_launcher.models import (
    CommandResult,
    InterpreterInfo,
    InterpreterUnavailable,
    LaunchSpec,
    ResolvedModule,
    StartupFailure,
)

logger = logging.getLogger(__name__)

FALLBACK_EXIT_CODE = 1
SIGNAL_EXIT_BASE = 128  # shell convention: killed by signal N -> 128 + N

_VERSION_RE = re.compile(r"v?(\d+)\.(\d+)(?:\.(\d+))?")


def parse_version(text: str) -> tuple[int, ...]:
    """Parse "v20.11.1" (or "20.11") into a tuple; empty tuple if unparseable."""
    match = _VERSION_RE.search(text or "")
    if not match:
        return ()
    return tuple(int(part) for part in match.groups() if part is not None)


def _padded(version: tuple[int, ...]) -> tuple[int, ...]:
    return version + (0,) * (3 - len(version))


def _version_probe_kwargs(timeout: float) -> dict:
    kwargs = {
        "capture_output": True,
        "text": True,
        "timeout": timeout,
    }
    # Hide console window on Windows
    if sys.platform == "win32":
        kwargs["creationflags"] = subprocess.CREATE_NO_WINDOW
    return kwargs


def check_interpreter(
    command: str = "node",
    minimum: str = "20.0.0",
    timeout: float = 10.0,
) -> InterpreterInfo:
    """Run ``<command> --version`` and report what was found.

    An outdated version is only logged: the minimum is advisory.

    Raises:
        InterpreterUnavailable: the command is missing, timed out, or
            exited non-zero.
    """
    try:
        result = subprocess.run([command, "--version"], **_version_probe_kwargs(timeout))
    except FileNotFoundError:
        raise InterpreterUnavailable(command, "command not found", minimum)
    except subprocess.TimeoutExpired:
        raise InterpreterUnavailable(command, f"version check timed out after {timeout:g}s", minimum)
    except OSError as e:
        raise InterpreterUnavailable(command, str(e), minimum)

    if result.returncode != 0:
        detail = (result.stderr or "").strip()[:200] or f"exit code {result.returncode}"
        raise InterpreterUnavailable(command, f"version check failed ({detail})", minimum)

    version = (result.stdout or "").strip() or (result.stderr or "").strip()
    found = parse_version(version)
    required = parse_version(minimum)
    meets_minimum = bool(found) and _padded(found) >= _padded(required)

    if not meets_minimum:
        logger.warning(
            "%s reports version %r; research-cli expects %s or newer",
            command, version or "unknown", minimum,
        )
    else:
        logger.debug("Interpreter %s %s", command, version)

    return InterpreterInfo(
        command=command,
        version=version,
        version_tuple=found,
        meets_minimum=meets_minimum,
    )


def build_child_env(
    environ: Mapping[str, str],
    inferred_root: Optional[Path],
) -> dict[str, str]:
    """Copy environ, adding the override variable only if the caller left it unset."""
    env = dict(environ)
    if inferred_root is not None and not env.get(OVERRIDE_ENV_VAR):
        env[OVERRIDE_ENV_VAR] = str(inferred_root)
        logger.debug("Setting %s=%s for the child", OVERRIDE_ENV_VAR, inferred_root)
    return env


def build_launch_spec(
    settings: LauncherSettings,
    resolved: ResolvedModule,
    args: list[str],
    inferred_root: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> LaunchSpec:
    if environ is None:
        environ = os.environ
    return LaunchSpec(
        interpreter=settings.node_binary,
        module_path=resolved.path,
        args=list(args),
        env=build_child_env(environ, inferred_root),
        inferred_home=inferred_root,
    )


def exit_code_for(returncode: Optional[int]) -> int:
    """Map a child's return code onto this process's exit code."""
    if returncode is None:
        return FALLBACK_EXIT_CODE
    if returncode < 0:
        return SIGNAL_EXIT_BASE - returncode
    return returncode


@contextmanager
def _sigint_to_child():
    """Ignore SIGINT in the launcher while the child runs.

    Ctrl+C reaches the whole foreground process group, so the child still
    receives it; the launcher just waits and reports the child's status.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def execute(spec: LaunchSpec) -> int:
    """Spawn the delegate with inherited streams and block until it exits.

    Raises:
        StartupFailure: the interpreter could not be spawned.
    """
    cmd = spec.command
    logger.debug("Spawning: %s", cmd)
    try:
        process = subprocess.Popen(cmd, env=spec.env)
    except OSError as e:
        raise StartupFailure(cmd, e) from e

    try:
        with _sigint_to_child():
            returncode = process.wait()
    except KeyboardInterrupt:
        # Ctrl+C landed before SIGINT was ignored; the child got it too.
        with _sigint_to_child():
            returncode = process.wait()

    logger.debug("Delegate (PID %s) exited with code %s", process.pid, returncode)
    return exit_code_for(returncode)


def capture(spec: LaunchSpec, timeout: Optional[float] = None) -> CommandResult:
    """Run the delegate non-interactively and return its captured output.

    Used by shells (e.g. a GUI) that display the result instead of
    attaching a terminal.

    Raises:
        StartupFailure: the interpreter could not be spawned.
    """
    cmd = spec.command
    logger.debug("Capturing: %s", cmd)
    try:
        result = subprocess.run(
            cmd,
            env=spec.env,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning("Delegate timed out after %ss: %s", timeout, cmd)
        return CommandResult(
            stderr="command timed out",
            exit_code=FALLBACK_EXIT_CODE,
        )
    except OSError as e:
        raise StartupFailure(cmd, e) from e

    return CommandResult(
        stdout=result.stdout or "",
        stderr=result.stderr or "",
        exit_code=exit_code_for(result.returncode),
    )
