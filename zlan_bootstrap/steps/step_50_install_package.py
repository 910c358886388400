from __future__ import annotations

import logging

from ..lib.pkg import apt_install
from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)


class InstallPackageStep:
    step_id = "50_install_package"

    def run(self, ctx: BootstrapCtx) -> None:
        package = ctx.cfg.package
        apt_install([package], dry_run=ctx.dry_run)
        logger.info("[SUCCESS] %s installed.", package)
