"""Ordered module search across override, executable, system, user and platform tiers.

Each tier builder turns a SearchContext into a SearchTier. ``resolve_module``
walks the builders in TIER_BUILDERS order and stops at the first probe hit,
so later builders never run once a module is found.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from research_launcher.config import PRODUCT_NAME, LauncherSettings
from research_launcher.models import (
    CLIModuleNotFound,
    ResolvedModule,
    SearchContext,
    SearchTier,
)
from research_launcher.probe import candidate_paths, probe

logger = logging.getLogger(__name__)

# Relative module layouts under an install root. Part of the external
# contract: installers and packagers rely on these exact suffixes.
MODULE_SUFFIXES = [
    "packages/cli/dist/index.js",
    "dist/index.js",
    "index.js",
]

# Layouts next to (or one level above) the launcher binary.
EXECUTABLE_SUFFIXES = [
    f"lib/{PRODUCT_NAME}/packages/cli/dist/index.js",
    f"lib/{PRODUCT_NAME}/dist/index.js",
    "packages/cli/dist/index.js",
]

SYSTEM_ROOTS = [
    Path("/usr/local/lib") / PRODUCT_NAME,
    Path("/opt") / PRODUCT_NAME,
    Path("/usr/lib") / PRODUCT_NAME,
]

USER_ROOT_PARTS = [
    (".local", "lib", PRODUCT_NAME),
    (f".{PRODUCT_NAME}",),
]

TierBuilder = Callable[[SearchContext], SearchTier]


def current_executable() -> Optional[Path]:
    """Path of the running launcher: the frozen binary, else argv[0]."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve()
    if sys.argv and sys.argv[0]:
        return Path(sys.argv[0]).resolve()
    return None


def context_from_settings(
    settings: LauncherSettings,
    executable: Optional[Path] = None,
    platform: Optional[str] = None,
) -> SearchContext:
    return SearchContext(
        override_root=settings.research_cli_home,
        executable=executable if executable is not None else current_executable(),
        home=settings.home,
        appdata=settings.appdata,
        platform=platform or sys.platform,
    )


# ── Tier builders ──────────────────────────────────────────────────────

def override_tier(ctx: SearchContext) -> SearchTier:
    roots = [ctx.override_root] if ctx.override_root is not None else []
    return SearchTier(name="override", roots=roots, suffixes=MODULE_SUFFIXES)


def executable_tier(ctx: SearchContext) -> SearchTier:
    roots: list[Path] = []
    if ctx.executable is not None:
        exe_dir = ctx.executable.parent
        roots.append(exe_dir)
        # Development trees keep the binary one level below the repo root.
        if exe_dir.parent != exe_dir:
            roots.append(exe_dir.parent)
    return SearchTier(name="executable", roots=roots, suffixes=EXECUTABLE_SUFFIXES)


def system_tier(ctx: SearchContext) -> SearchTier:
    return SearchTier(name="system", roots=list(SYSTEM_ROOTS), suffixes=MODULE_SUFFIXES)


def user_tier(ctx: SearchContext) -> SearchTier:
    roots: list[Path] = []
    if ctx.home is not None:
        roots = [ctx.home.joinpath(*parts) for parts in USER_ROOT_PARTS]
    return SearchTier(name="user", roots=roots, suffixes=MODULE_SUFFIXES)


def platform_tier(ctx: SearchContext) -> SearchTier:
    roots: list[Path] = []
    if ctx.platform == "win32" and ctx.appdata is not None:
        roots.append(ctx.appdata / PRODUCT_NAME)
    return SearchTier(name="platform", roots=roots, suffixes=MODULE_SUFFIXES)


TIER_BUILDERS: list[TierBuilder] = [
    override_tier,
    executable_tier,
    system_tier,
    user_tier,
    platform_tier,
]


# ── Resolution ─────────────────────────────────────────────────────────

def search_tier(tier: SearchTier) -> Optional[ResolvedModule]:
    """Probe every root of one tier in order; first hit wins."""
    for root in tier.roots:
        hit = probe(root, tier.suffixes)
        if hit is not None:
            return ResolvedModule(path=hit.absolute(), tier=tier.name, root=root)
    return None


def resolve_module(
    ctx: SearchContext,
    builders: Optional[list[TierBuilder]] = None,
) -> ResolvedModule:
    """Return the first module found across the ordered tiers.

    Raises:
        CLIModuleNotFound: no tier produced an existing path. The exception
            lists every candidate that was probed.
    """
    if builders is None:
        builders = TIER_BUILDERS

    searched: list[Path] = []
    for build in builders:
        tier = build(ctx)
        logger.debug("Searching tier %r (%d roots)", tier.name, len(tier.roots))
        resolved = search_tier(tier)
        if resolved is not None:
            logger.info("Resolved %s via %s tier", resolved.path, resolved.tier)
            return resolved
        for root in tier.roots:
            searched.extend(candidate_paths(root, tier.suffixes))

    raise CLIModuleNotFound(searched)
