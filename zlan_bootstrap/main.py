from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from typing import Optional

from .config import BootstrapConfig, load_config
from .errors import BootstrapError, UnsupportedPlatformError
from .lib.apt_repo import detect_apt_version
from .lib.distro import LSB_RELEASE, OS_RELEASE, detect_distro
from .logging_utils import configure_logging
from .pipeline import BootstrapCtx, PipelineResult, run_pipeline
from .steps import (
    ConfigurePrivateFeedStep,
    ConfigurePublicFeedStep,
    InstallPackageStep,
    RefreshIndexStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        ConfigurePrivateFeedStep(),
        ConfigurePublicFeedStep(),
        RefreshIndexStep(),
        InstallPackageStep(),
    ]


def run(
    cfg: BootstrapConfig,
    *,
    access_user: str,
    access_token: str,
    dry_run: bool = False,
    os_release: str = OS_RELEASE,
    lsb_release: str = LSB_RELEASE,
) -> PipelineResult:
    """Detect the host, then configure both feeds and install the package."""

    distro = detect_distro(os_release=os_release, lsb_release=lsb_release)
    if distro.distro_id not in cfg.supported_distros:
        raise UnsupportedPlatformError(f"Unsupported distribution: {distro.distro_id}")

    ctx = BootstrapCtx(
        cfg=cfg,
        distro=distro,
        access_user=access_user,
        access_token=access_token,
        apt_version=detect_apt_version(),
        dry_run=dry_run,
    )

    logger.info("Starting setup for %s...", cfg.package)
    return run_pipeline(ctx=ctx, steps=build_steps())


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="zlan-bootstrap",
        description="Configure the NetFoundry and Elastic APT feeds, then install zlan-firewall-installer.",
    )
    p.add_argument("access_user", nargs="?", default="", help="Private feed user")
    p.add_argument("access_token", nargs="?", default="", help="Private feed access token")
    p.add_argument("--config", default=None, help="YAML file overriding feeds/paths/package")
    p.add_argument("--log", default=None, help="Path to log file")
    p.add_argument("--package", default=None, help="Package to install")
    p.add_argument("--dry-run", action="store_true", help="Log commands and writes without executing them")
    p.add_argument("--verbose", action="store_true", help="Log command output")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    # Nothing may be written (not even the log) before the arguments check out.
    if not args.access_user or not args.access_token:
        print(f"Usage: {p.prog} <access_user> <access_token>", file=sys.stderr)
        return 1

    try:
        cfg = load_config(args.config)
    except (OSError, ValueError, RuntimeError) as e:
        print(f"[ERROR] Cannot load config: {e}", file=sys.stderr)
        return 1
    if args.package:
        cfg = BootstrapConfig(raw={**cfg.raw, "package": args.package})

    try:
        configure_logging(
            log_path=args.log or cfg.paths.log_path,
            level=logging.DEBUG if args.verbose else logging.INFO,
        )
    except OSError as e:
        print(f"[ERROR] Cannot write to log file: {e}", file=sys.stderr)
        return 1
    logger.info("===== [START] %s - Bootstrap =====", datetime.now().isoformat(timespec="seconds"))

    try:
        run(
            cfg,
            access_user=args.access_user,
            access_token=args.access_token,
            dry_run=bool(args.dry_run),
        )
    except BootstrapError as e:
        logger.error("%s", e)
        return 1
    except Exception:
        logger.exception("Bootstrap failed")
        return 1

    logger.info("===== [END] %s =====", datetime.now().isoformat(timespec="seconds"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
