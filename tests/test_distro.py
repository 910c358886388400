"""Distro detection from os-release, lsb_release and lsb-release."""

import pytest

from zlan_bootstrap.errors import DetectionError
from zlan_bootstrap.lib.distro import detect_distro, parse_env_file


def test_parse_env_file_strips_quotes_and_comments():
    env = parse_env_file('# comment\nNAME="Debian GNU/Linux"\nID=debian\n\nVERSION_CODENAME=bookworm\n')
    assert env == {"NAME": "Debian GNU/Linux", "ID": "debian", "VERSION_CODENAME": "bookworm"}


def test_os_release_wins(tmp_path, no_lsb_release):
    os_release = tmp_path / "os-release"
    os_release.write_text('ID="Ubuntu"\nVERSION_CODENAME=noble\n')
    lsb = tmp_path / "lsb-release"
    lsb.write_text("DISTRIB_ID=Debian\nDISTRIB_CODENAME=bookworm\n")

    info = detect_distro(os_release=str(os_release), lsb_release=str(lsb))
    assert (info.distro_id, info.suite, info.source) == ("ubuntu", "noble", "os-release")


def test_lsb_release_file_only(tmp_path, no_lsb_release):
    lsb = tmp_path / "lsb-release"
    lsb.write_text("DISTRIB_ID=Ubuntu\nDISTRIB_RELEASE=22.04\nDISTRIB_CODENAME=jammy\n")

    info = detect_distro(os_release=str(tmp_path / "missing"), lsb_release=str(lsb))
    assert info.distro_id == "ubuntu"
    assert info.suite == "jammy"
    assert info.source == "lsb-release"


def test_lsb_release_command_before_file(tmp_path, fake_run, monkeypatch):
    monkeypatch.setattr("zlan_bootstrap.lib.distro.shutil.which", lambda name: "/usr/bin/lsb_release")
    fake_run.set("lsb_release -si", stdout="Debian\n")
    fake_run.set("lsb_release -sc", stdout="trixie\n")
    lsb = tmp_path / "lsb-release"
    lsb.write_text("DISTRIB_ID=Ubuntu\nDISTRIB_CODENAME=jammy\n")

    info = detect_distro(os_release=str(tmp_path / "missing"), lsb_release=str(lsb))
    assert (info.distro_id, info.suite, info.source) == ("debian", "trixie", "lsb_release")


def test_incomplete_os_release_does_not_fall_through(tmp_path, no_lsb_release):
    os_release = tmp_path / "os-release"
    os_release.write_text("ID=debian\n")
    lsb = tmp_path / "lsb-release"
    lsb.write_text("DISTRIB_ID=Ubuntu\nDISTRIB_CODENAME=jammy\n")

    with pytest.raises(DetectionError, match="SUITE=''"):
        detect_distro(os_release=str(os_release), lsb_release=str(lsb))


def test_nothing_available(tmp_path, no_lsb_release):
    with pytest.raises(DetectionError):
        detect_distro(os_release=str(tmp_path / "a"), lsb_release=str(tmp_path / "b"))
