from __future__ import annotations

import logging

from ..lib.apt_repo import configure_feed
from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)


class ConfigurePublicFeedStep:
    step_id = "30_public_feed"

    def run(self, ctx: BootstrapCtx) -> None:
        # Public feed: keyring + source definition, no credentials.
        configure_feed(
            ctx.cfg.public_feed,
            ctx.cfg.paths,
            suite=ctx.distro.suite,
            apt_version=ctx.apt_version,
            dry_run=ctx.dry_run,
        )
