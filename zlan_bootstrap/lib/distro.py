from __future__ import annotations

import logging
import shlex
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from ..errors import CommandError, DetectionError
from .command import run_cmd

logger = logging.getLogger(__name__)

OS_RELEASE = "/etc/os-release"
LSB_RELEASE = "/etc/lsb-release"


@dataclass(frozen=True)
class DistroInfo:
    distro_id: str
    suite: str
    source: str


def parse_env_file(text: str) -> Dict[str, str]:
    """Parse shell-style KEY=VALUE lines (os-release(5) syntax)."""

    out: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        try:
            parts = shlex.split(value)
        except ValueError:
            parts = [value.strip("\"'")]
        out[key.strip()] = " ".join(parts)
    return out


def _read_env_file(path: Path) -> Optional[Dict[str, str]]:
    if not path.is_file():
        return None
    return parse_env_file(path.read_text(encoding="utf-8", errors="ignore"))


def _from_lsb_release_cmd() -> Optional[Dict[str, str]]:
    if shutil.which("lsb_release") is None:
        return None
    try:
        distro_id = run_cmd(["lsb_release", "-si"]).stdout.strip()
        suite = run_cmd(["lsb_release", "-sc"]).stdout.strip()
    except CommandError as e:
        raise DetectionError(f"lsb_release failed: {e}") from e
    return {"id": distro_id, "suite": suite}


def detect_distro(
    *,
    os_release: str = OS_RELEASE,
    lsb_release: str = LSB_RELEASE,
) -> DistroInfo:
    """Identify the host distro and codename.

    Sources, first available wins (later ones are not consulted even if the
    first is incomplete):
      1. /etc/os-release   (ID, VERSION_CODENAME)
      2. lsb_release -si / -sc
      3. /etc/lsb-release  (DISTRIB_ID, DISTRIB_CODENAME)
    """

    source = ""
    distro_id = ""
    suite = ""

    env = _read_env_file(Path(os_release))
    if env is not None:
        source = "os-release"
        distro_id = env.get("ID", "")
        suite = env.get("VERSION_CODENAME", "")
    else:
        lsb = _from_lsb_release_cmd()
        if lsb is not None:
            source = "lsb_release"
            distro_id = lsb["id"]
            suite = lsb["suite"]
        else:
            env = _read_env_file(Path(lsb_release))
            if env is not None:
                source = "lsb-release"
                distro_id = env.get("DISTRIB_ID", "")
                suite = env.get("DISTRIB_CODENAME", "")

    distro_id = distro_id.strip().lower()
    suite = suite.strip().lower()

    if not distro_id or not suite:
        raise DetectionError(
            f"Failed to detect distro and/or codename. DISTRO_ID='{distro_id}', SUITE='{suite}'"
        )

    logger.info("Detected distro: %s, suite: %s (via %s)", distro_id, suite, source)
    return DistroInfo(distro_id=distro_id, suite=suite, source=source)
