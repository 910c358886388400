from __future__ import annotations

import logging
from typing import Sequence

from ..errors import ConfigValidationError
from .command import CmdResult, run_best_effort, run_cmd

logger = logging.getLogger(__name__)


def validate_config(validator_argv: Sequence[str], *, dry_run: bool = False) -> CmdResult:
    """Run an external config checker; non-zero exit is a ConfigValidationError."""

    r = run_cmd(validator_argv, check=False, dry_run=dry_run)
    if not r.ok:
        detail = (r.stderr or r.stdout).strip()
        raise ConfigValidationError(
            f"Invalid config ({r.returncode}): {detail}" if detail else f"Invalid config ({r.returncode})"
        )
    return r


def restart_service(name: str, *, dry_run: bool = False) -> bool:
    """Best-effort `systemctl restart`; returns False instead of raising."""

    logger.info("Restarting %s...", name)
    return run_best_effort(["systemctl", "restart", name], dry_run=dry_run) is not None
