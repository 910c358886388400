from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pytest

from zlan_bootstrap.config import BootstrapConfig
from zlan_bootstrap.lib.distro import DistroInfo
from zlan_bootstrap.logging_utils import reset_logging

ARMORED_KEY = "-----BEGIN PGP PUBLIC KEY BLOCK-----\nabc\n-----END PGP PUBLIC KEY BLOCK-----\n"


class FakeRunner:
    """Stands in for subprocess.run; answers by longest matching argv prefix."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.envs: List[Dict[str, str]] = []
        self.rules: Dict[str, Tuple[int, str]] = {
            "curl": (0, ARMORED_KEY),
            "apt --version": (0, "apt 2.6.1 (amd64)\n"),
        }

    def set(self, prefix: str, returncode: int = 0, stdout: str = "") -> None:
        self.rules[prefix] = (returncode, stdout)

    def commands(self, prefix: str) -> List[List[str]]:
        return [c for c in self.calls if " ".join(c).startswith(prefix)]

    def __call__(self, argv, **kwargs: Any) -> subprocess.CompletedProcess:
        argv = list(argv)
        self.calls.append(argv)
        self.envs.append(kwargs.get("env") or {})
        joined = " ".join(argv)
        matches = [k for k in self.rules if joined.startswith(k)]
        rc, out = self.rules[max(matches, key=len)] if matches else (0, "")

        if argv[0] == "gpg" and rc == 0 and "-o" in argv:
            out_path = Path(argv[argv.index("-o") + 1])
            out_path.write_bytes(b"DEARMORED:" + (kwargs.get("input") or "").encode("utf-8"))

        return subprocess.CompletedProcess(argv, rc, out, "" if rc == 0 else f"{argv[0]} failed")


@pytest.fixture
def fake_run(monkeypatch) -> FakeRunner:
    runner = FakeRunner()
    monkeypatch.setattr("zlan_bootstrap.lib.command.subprocess.run", runner)
    return runner


@pytest.fixture
def no_lsb_release(monkeypatch) -> None:
    monkeypatch.setattr("zlan_bootstrap.lib.distro.shutil.which", lambda name: None)


@pytest.fixture
def sys_root(tmp_path) -> Path:
    root = tmp_path / "root"
    root.mkdir()
    return root


@pytest.fixture
def raw_config(sys_root) -> Dict[str, Any]:
    return {
        "paths": {
            "keyring_dir": str(sys_root / "usr/share/keyrings"),
            "sources_dir": str(sys_root / "etc/apt/sources.list.d"),
            "auth_dir": str(sys_root / "etc/apt/auth.conf.d"),
            "log_path": str(sys_root / "var/log/zlan-firewall-installer.log"),
        },
        "hook": {
            "source": str(sys_root / "opt/zlan-firewall/etc/filebeat.yml"),
            "destination": str(sys_root / "etc/filebeat/filebeat.yml"),
        },
    }


@pytest.fixture
def cfg(raw_config) -> BootstrapConfig:
    return BootstrapConfig(raw=raw_config)


@pytest.fixture
def ubuntu() -> DistroInfo:
    return DistroInfo(distro_id="ubuntu", suite="jammy", source="os-release")


@pytest.fixture
def home(tmp_path, monkeypatch) -> Path:
    h = tmp_path / "home"
    h.mkdir()
    monkeypatch.setenv("HOME", str(h))
    return h


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging()
