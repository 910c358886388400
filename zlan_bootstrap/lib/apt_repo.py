from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Optional

from ..config import Feed, Paths
from ..errors import CredentialsError
from .command import run_cmd
from .keyring import install_keyring

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"^(\d+)\.(\d+)")


def detect_apt_version(*, dry_run: bool = False) -> str:
    """Return the installed apt version ("2.6.1"), or "" if unknown.

    `apt --version` prints e.g. "apt 2.6.1 (amd64)".
    """

    r = run_cmd(["apt", "--version"], check=False, dry_run=dry_run)
    if not r.ok or not r.stdout:
        return ""
    fields = r.stdout.splitlines()[0].split()
    return fields[1] if len(fields) > 1 else ""


def use_deb822(apt_version: str) -> bool:
    """apt >= 2.0 and the 1.8/1.9 series understand .sources (DEB822) files."""

    m = _VERSION_RE.match(apt_version.strip())
    if not m:
        return False
    major, minor = int(m.group(1)), int(m.group(2))
    return major >= 2 or (major == 1 and minor in (8, 9))


def render_one_line(feed: Feed, suite: str) -> str:
    components = " ".join(feed.components)
    return f"deb [signed-by={feed.keyring}] {feed.url} {suite} {components}\n"


def render_deb822(feed: Feed, suite: str) -> str:
    return "\n".join(
        [
            "Types: deb",
            f"URIs: {feed.url}",
            f"Suites: {suite}",
            f"Components: {' '.join(feed.components)}",
            f"Signed-By: {feed.keyring}",
            "",
        ]
    )


def source_paths(feed: Feed, paths: Paths) -> tuple[Path, Path]:
    """(one-line .list path, DEB822 .sources path) for a feed."""

    d = Path(paths.sources_dir)
    return d / f"{feed.name}.list", d / f"{feed.name}.sources"


def remove_stale_sources(feed: Feed, paths: Paths, *, dry_run: bool = False) -> None:
    logger.info("Removing old %s repo files...", feed.name)
    for p in source_paths(feed, paths):
        if dry_run:
            logger.info("Would remove %s", str(p))
            continue
        p.unlink(missing_ok=True)


def write_source(
    feed: Feed,
    paths: Paths,
    *,
    suite: str,
    deb822: bool,
    dry_run: bool = False,
) -> str:
    list_path, sources_path = source_paths(feed, paths)
    if deb822:
        p, body = sources_path, render_deb822(feed, suite)
    else:
        p, body = list_path, render_one_line(feed, suite)

    if dry_run:
        logger.info("Would write %s", str(p))
        return str(p)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(body, encoding="utf-8")
    logger.info("Wrote repository definition %s", str(p))
    return str(p)


def render_credentials(host: str, user: str, token: str) -> str:
    return f"machine {host}\nlogin {user}\npassword {token}\n"


def write_credentials(
    feed: Feed,
    paths: Paths,
    *,
    user: str,
    token: str,
    dry_run: bool = False,
) -> str:
    """Write the apt auth.conf.d record for the feed host, owner-only (0600)."""

    p = Path(paths.auth_dir) / f"{feed.name}.conf"
    if dry_run:
        logger.info("Would write %s", str(p))
        return str(p)

    p.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(p, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    # The open mode only applies on creation; an existing file keeps its own.
    os.fchmod(fd, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(render_credentials(feed.host, user, token))
    logger.info("Wrote APT credentials for %s", feed.host)
    return str(p)


def configure_feed(
    feed: Feed,
    paths: Paths,
    *,
    suite: str,
    apt_version: str,
    user: Optional[str] = None,
    token: Optional[str] = None,
    dry_run: bool = False,
) -> None:
    """Install keyring, replace source definition and (auth feeds) credentials."""

    if feed.auth and (not user or not token):
        raise CredentialsError(f"{feed.name} requires access credentials")

    logger.info("Setting up %s APT repository...", feed.name)
    install_keyring(feed, dry_run=dry_run)

    deb822 = use_deb822(apt_version)
    logger.info("apt version %r -> %s format", apt_version, "deb822" if deb822 else "one-line")

    remove_stale_sources(feed, paths, dry_run=dry_run)
    write_source(feed, paths, suite=feed.suite or suite, deb822=deb822, dry_run=dry_run)

    if feed.auth:
        write_credentials(feed, paths, user=user, token=token, dry_run=dry_run)
