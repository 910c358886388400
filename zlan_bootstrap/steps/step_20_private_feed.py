from __future__ import annotations

import logging

from ..lib.apt_repo import configure_feed
from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)


class ConfigurePrivateFeedStep:
    step_id = "20_private_feed"

    def run(self, ctx: BootstrapCtx) -> None:
        feed = ctx.cfg.private_feed
        configure_feed(
            feed,
            ctx.cfg.paths,
            suite=ctx.distro.suite,
            apt_version=ctx.apt_version,
            user=ctx.access_user,
            token=ctx.access_token,
            dry_run=ctx.dry_run,
        )
