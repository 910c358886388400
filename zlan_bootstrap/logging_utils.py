from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

DEFAULT_LOG_PATH = "/var/log/zlan-firewall-installer.log"
FALLBACK_LOG_NAME = "zlan-firewall-installer.log"


def _fallback_path() -> Path:
    return Path.home() / FALLBACK_LOG_NAME


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure logging.

    All output goes to the log file and (by default) the console.

    Notes:
    - /var/log is usually only writable by root. When the requested
      directory is not writable we fall back to ~/zlan-firewall-installer.log.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_zlan_configured", False):
        return getattr(logger, "_zlan_log_path", log_path)

    chosen_path = log_path
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    file_handler: Optional[logging.Handler] = None
    log_dir = os.path.dirname(log_path) or "."
    try:
        if not os.access(log_dir, os.W_OK):
            raise PermissionError(log_dir)
        file_handler = logging.FileHandler(log_path)
    except OSError:
        chosen_path = str(_fallback_path())
        file_handler = logging.FileHandler(chosen_path)
    file_handler.setFormatter(fmt)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_zlan_configured", True)
    setattr(logger, "_zlan_log_path", chosen_path)
    setattr(logger, "_zlan_handlers", handlers)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path


def reset_logging() -> None:
    """Drop handlers installed by configure_logging()."""

    logger = logging.getLogger()
    if not getattr(logger, "_zlan_configured", False):
        return
    for h in getattr(logger, "_zlan_handlers", []):
        logger.removeHandler(h)
        h.close()
    setattr(logger, "_zlan_configured", False)
    setattr(logger, "_zlan_handlers", [])
