from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Protocol, Sequence

from .config import BootstrapConfig
from .lib.distro import DistroInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BootstrapCtx:
    """Everything a step needs; replaces ambient shell variables."""

    cfg: BootstrapConfig
    distro: DistroInfo
    access_user: str
    access_token: str
    apt_version: str = ""
    dry_run: bool = False


class Step(Protocol):
    """A single idempotent step."""

    step_id: str

    def run(self, ctx: BootstrapCtx) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]


def run_pipeline(*, ctx: BootstrapCtx, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order; the first exception aborts the run.

    Artifacts written by earlier steps are left in place.
    """

    ran: List[str] = []
    for step in steps:
        logger.info("Running step %s", step.step_id)
        step.run(ctx)
        ran.append(step.step_id)
    return PipelineResult(ran_steps=ran)
