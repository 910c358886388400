from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".bak"


def backup_path(destination: str) -> Path:
    return Path(destination + BACKUP_SUFFIX)


def backup_regular_file(destination: str, *, dry_run: bool = False) -> Optional[str]:
    """Copy a real (non-symlink) config file to <destination>.bak.

    Only one backup is kept; a previous .bak is overwritten.
    """

    dst = Path(destination)
    if dst.is_symlink() or not dst.is_file():
        return None

    bak = backup_path(destination)
    logger.info("Backing up existing config to %s", str(bak))
    if not dry_run:
        shutil.copy2(dst, bak)
    return str(bak)


def force_symlink(source: str, destination: str, *, dry_run: bool = False) -> None:
    """Equivalent of `ln -sf source destination` (parent dir created)."""

    dst = Path(destination)
    logger.info("Creating symlink from %s to %s", destination, source)
    if dry_run:
        return

    dst.parent.mkdir(parents=True, exist_ok=True)
    if dst.is_symlink() or dst.exists():
        if dst.is_dir() and not dst.is_symlink():
            raise IsADirectoryError(destination)
        dst.unlink()
    os.symlink(source, dst)


def is_linked(source: str, destination: str) -> bool:
    dst = Path(destination)
    return dst.is_symlink() and os.readlink(dst) == source
