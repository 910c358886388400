from __future__ import annotations

import logging
import os
from pathlib import Path

from ..config import Feed
from ..errors import CommandError, KeyFetchError
from .command import run_cmd

logger = logging.getLogger(__name__)


def fetch_key(key_url: str, *, dry_run: bool = False) -> str:
    """Download an ASCII-armored public key."""

    r = run_cmd(["curl", "-fsSL", key_url], dry_run=dry_run)
    if not dry_run and not r.stdout.strip():
        raise KeyFetchError(f"Empty key returned from {key_url}")
    return r.stdout


def install_keyring(feed: Feed, *, dry_run: bool = False) -> str:
    """Fetch the feed's signing key and dearmor it into feed.keyring (0644)."""

    keyring = Path(feed.keyring)
    logger.info("Installing %s GPG key -> %s", feed.name, keyring)
    try:
        armored = fetch_key(feed.key_url, dry_run=dry_run)
        if not dry_run:
            keyring.parent.mkdir(parents=True, exist_ok=True)
        run_cmd(
            ["gpg", "--batch", "--yes", "--dearmor", "-o", str(keyring)],
            input_text=armored,
            dry_run=dry_run,
        )
        if not dry_run:
            os.chmod(keyring, 0o644)
    except (CommandError, OSError) as e:
        raise KeyFetchError(f"Failed to fetch or write {feed.name} GPG key: {e}") from e
    return str(keyring)
