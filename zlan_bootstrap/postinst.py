"""Post-install hook: put the packaged Filebeat config in place.

Invoked by dpkg as `postinst configure <version>` (the maintainer-script
arguments are logged and otherwise ignored).

Order is link, then validate. If validation fails the symlink stays, so the
invalid config is live until someone fixes it; the hook only guarantees the
service is not restarted onto it.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .config import HookConfig, load_config
from .errors import ConfigValidationError
from .lib.config_link import backup_regular_file, force_symlink, is_linked
from .lib.service import restart_service, validate_config
from .logging_utils import configure_logging

logger = logging.getLogger(__name__)


def run(hook: HookConfig, *, dry_run: bool = False) -> bool:
    """Link and validate the config; return whether the restart succeeded."""

    logger.info("[postinst] Setting up %s configuration...", hook.service)
    if is_linked(hook.source, hook.destination):
        logger.info("[postinst] %s already links to %s", hook.destination, hook.source)
    else:
        backup_regular_file(hook.destination, dry_run=dry_run)
        force_symlink(hook.source, hook.destination, dry_run=dry_run)

    logger.info("[postinst] Validating %s config...", hook.service)
    validate_config(hook.validator_argv(), dry_run=dry_run)
    logger.info("[postinst] Config is valid.")

    restarted = restart_service(hook.service, dry_run=dry_run)
    logger.info("[postinst] %s configuration setup complete.", hook.service)
    return restarted


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="zlan-postinst")
    p.add_argument("action", nargs="?", default="configure", help="dpkg maintainer-script action")
    p.add_argument("action_args", nargs="*", help="Extra dpkg arguments (ignored)")
    p.add_argument("--config", default=None, help="YAML file overriding hook settings")
    p.add_argument("--log", default=None, help="Path to log file")
    p.add_argument("--dry-run", action="store_true")

    args = p.parse_args(argv)

    try:
        cfg = load_config(args.config)
    except (OSError, ValueError, RuntimeError) as e:
        print(f"[postinst] ERROR: Cannot load config: {e}", file=sys.stderr)
        return 1

    try:
        configure_logging(log_path=args.log or cfg.paths.log_path)
    except OSError as e:
        print(f"[postinst] ERROR: Cannot write to log file: {e}", file=sys.stderr)
        return 1
    logger.info("[postinst] invoked with action=%s args=%s", args.action, args.action_args)

    hook = cfg.hook
    try:
        run(hook, dry_run=bool(args.dry_run))
    except ConfigValidationError as e:
        logger.error("[postinst] ERROR: Invalid %s config at %s: %s", hook.service, hook.destination, e)
        return 1
    except OSError:
        logger.exception("[postinst] Failed to install %s", hook.destination)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
