from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlparse

from .logging_utils import DEFAULT_LOG_PATH

DEFAULT_PACKAGE = "zlan-firewall-installer"
DEFAULT_SUPPORTED_DISTROS = ("debian", "ubuntu")

NF_REPO_HOST = "netfoundry.jfrog.io"
NF_REPO_NAME = "netfoundry-private-deb"
ELASTIC_REPO_NAME = "elastic-oss-9x"
ELASTIC_REPO_URL = "https://artifacts.elastic.co/packages/oss-9.x/apt"
ELASTIC_KEY_URL = "https://artifacts.elastic.co/GPG-KEY-elasticsearch"


@dataclass(frozen=True)
class Paths:
    keyring_dir: str = "/usr/share/keyrings"
    sources_dir: str = "/etc/apt/sources.list.d"
    auth_dir: str = "/etc/apt/auth.conf.d"
    log_path: str = DEFAULT_LOG_PATH


@dataclass(frozen=True)
class Feed:
    """One APT package feed.

    suite=None means "whatever suite the host runs" (resolved after distro
    detection). Only feeds with auth=True get a credentials file.
    """

    name: str
    url: str
    key_url: str
    keyring: str
    suite: Optional[str] = None
    components: Tuple[str, ...] = ("main",)
    auth: bool = False

    @property
    def host(self) -> str:
        return urlparse(self.url).hostname or ""


@dataclass(frozen=True)
class HookConfig:
    source: str = "/opt/zlan-firewall/etc/filebeat.yml"
    destination: str = "/etc/filebeat/filebeat.yml"
    validator: Tuple[str, ...] = ("/usr/share/filebeat/bin/filebeat", "test", "config", "-c")
    service: str = "filebeat"

    def validator_argv(self) -> list[str]:
        return [*self.validator, self.destination]


def _section(raw: Dict[str, Any], *keys: str) -> Dict[str, Any]:
    cur: Any = raw
    for k in keys:
        cur = (cur or {}).get(k) if isinstance(cur, dict) else None
    return cur if isinstance(cur, dict) else {}


@dataclass(frozen=True)
class BootstrapConfig:
    raw: Dict[str, Any]

    @property
    def package(self) -> str:
        return str(self.raw.get("package") or DEFAULT_PACKAGE)

    @property
    def supported_distros(self) -> Tuple[str, ...]:
        distros = self.raw.get("supported_distros") or DEFAULT_SUPPORTED_DISTROS
        return tuple(str(d).lower() for d in distros)

    @property
    def paths(self) -> Paths:
        p = _section(self.raw, "paths")
        d = Paths()
        return Paths(
            keyring_dir=str(p.get("keyring_dir") or d.keyring_dir),
            sources_dir=str(p.get("sources_dir") or d.sources_dir),
            auth_dir=str(p.get("auth_dir") or d.auth_dir),
            log_path=str(p.get("log_path") or d.log_path),
        )

    def _feed(self, key: str, defaults: Dict[str, Any]) -> Feed:
        f = {**defaults, **_section(self.raw, "feeds", key)}
        name = str(f["name"])
        keyring = f.get("keyring") or str(Path(self.paths.keyring_dir) / f"{name}.gpg")
        components = f.get("components") or ("main",)
        if isinstance(components, str):
            components = components.split()
        return Feed(
            name=name,
            url=str(f["url"]),
            key_url=str(f["key_url"]),
            keyring=str(keyring),
            suite=(str(f["suite"]) if f.get("suite") else None),
            components=tuple(str(c) for c in components),
            auth=bool(f.get("auth", False)),
        )

    @property
    def private_feed(self) -> Feed:
        host = str(_section(self.raw, "feeds", "private").get("host") or NF_REPO_HOST)
        name = str(_section(self.raw, "feeds", "private").get("name") or NF_REPO_NAME)
        return self._feed(
            "private",
            {
                "name": name,
                "url": f"https://{host}/artifactory/{name}",
                "key_url": f"https://{host}/artifactory/api/security/keypair/public/repositories/{name}",
                "auth": True,
            },
        )

    @property
    def public_feed(self) -> Feed:
        # Elastic only publishes a "stable" suite.
        return self._feed(
            "public",
            {
                "name": ELASTIC_REPO_NAME,
                "url": ELASTIC_REPO_URL,
                "key_url": ELASTIC_KEY_URL,
                "suite": "stable",
            },
        )

    @property
    def hook(self) -> HookConfig:
        h = _section(self.raw, "hook")
        d = HookConfig()
        validator = h.get("validator") or d.validator
        if isinstance(validator, str):
            validator = validator.split()
        return HookConfig(
            source=str(h.get("source") or d.source),
            destination=str(h.get("destination") or d.destination),
            validator=tuple(str(a) for a in validator),
            service=str(h.get("service") or d.service),
        )


def load_config(path: Optional[str] = None) -> BootstrapConfig:
    """Load an optional YAML override file; no path means built-in defaults."""

    if not path:
        return BootstrapConfig(raw={})

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the config file") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"{p}: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"{p} must contain a mapping/object")

    return BootstrapConfig(raw=raw)
