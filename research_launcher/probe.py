"""Filesystem existence probing for candidate module locations."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

logger = logging.getLogger(__name__)


def candidate_paths(root: Union[str, Path, None], suffixes: Iterable[str]) -> list[Path]:
    """Join each suffix onto root, in order. Empty when root is unset."""
    if root is None or str(root) == "":
        return []
    base = Path(root)
    return [base / suffix for suffix in suffixes]


def probe(root: Union[str, Path, None], suffixes: Iterable[str]) -> Optional[Path]:
    """Return the first ``root/suffix`` that exists, or None.

    A missing or unreadable root is a plain miss, never an error.
    """
    for candidate in candidate_paths(root, suffixes):
        try:
            if candidate.exists():
                logger.debug("Probe hit: %s", candidate)
                return candidate
        except OSError as e:
            logger.debug("Probe skipped %s: %s", candidate, e)
    return None
