from __future__ import annotations

import logging
from typing import Sequence

from ..errors import CommandError, InstallError
from .command import run_cmd

logger = logging.getLogger(__name__)

_NONINTERACTIVE = {"DEBIAN_FRONTEND": "noninteractive"}


def apt_update(*, dry_run: bool = False) -> None:
    logger.info("Updating APT metadata...")
    try:
        run_cmd(["apt-get", "update"], env=_NONINTERACTIVE, dry_run=dry_run)
    except CommandError as e:
        raise InstallError("apt-get update failed") from e


def apt_install(packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    logger.info("Installing %s...", " ".join(packages))
    try:
        run_cmd(["apt-get", "install", "-y", *packages], env=_NONINTERACTIVE, dry_run=dry_run)
    except CommandError as e:
        raise InstallError(f"Installation failed: {' '.join(packages)}") from e
