from __future__ import annotations

from ..lib.pkg import apt_update
from ..pipeline import BootstrapCtx


class RefreshIndexStep:
    step_id = "40_refresh_index"

    def run(self, ctx: BootstrapCtx) -> None:
        apt_update(dry_run=ctx.dry_run)
