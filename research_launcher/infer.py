"""Infer the install root from a resolved module path."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from research_launcher.config import PRODUCT_NAME

logger = logging.getLogger(__name__)

MANIFEST_FILE = "package.json"
PACKAGES_DIR = "packages"


def looks_like_install_root(directory: Path) -> bool:
    """True if directory has a manifest, a packages/ dir, or the product name."""
    try:
        return (
            (directory / MANIFEST_FILE).is_file()
            or (directory / PACKAGES_DIR).is_dir()
            or directory.name == PRODUCT_NAME
        )
    except OSError as e:
        logger.debug("Cannot inspect %s: %s", directory, e)
        return False


def infer_install_root(module_path: Path) -> Optional[Path]:
    """Walk upward from the module's directory to the first install-root marker.

    Returns None when the filesystem root is reached without a match.
    """
    current = Path(module_path).absolute().parent
    while True:
        if looks_like_install_root(current):
            logger.debug("Inferred install root: %s", current)
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent
