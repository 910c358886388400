import pytest

from zlan_bootstrap.config import BootstrapConfig, load_config


def test_defaults():
    cfg = load_config(None)
    assert cfg.package == "zlan-firewall-installer"
    assert cfg.supported_distros == ("debian", "ubuntu")

    private = cfg.private_feed
    assert private.name == "netfoundry-private-deb"
    assert private.url == "https://netfoundry.jfrog.io/artifactory/netfoundry-private-deb"
    assert private.key_url.endswith("/api/security/keypair/public/repositories/netfoundry-private-deb")
    assert private.keyring == "/usr/share/keyrings/netfoundry-private-deb.gpg"
    assert private.host == "netfoundry.jfrog.io"
    assert private.auth is True
    assert private.suite is None

    public = cfg.public_feed
    assert public.name == "elastic-oss-9x"
    assert public.suite == "stable"
    assert public.auth is False

    hook = cfg.hook
    assert hook.validator_argv() == [
        "/usr/share/filebeat/bin/filebeat", "test", "config", "-c", "/etc/filebeat/filebeat.yml",
    ]


def test_yaml_overrides(tmp_path):
    p = tmp_path / "zlan.yaml"
    p.write_text(
        "package: other-pkg\n"
        "paths:\n"
        "  keyring_dir: /tmp/keys\n"
        "feeds:\n"
        "  private:\n"
        "    host: mirror.example.com\n"
        "    components: main extra\n"
        "hook:\n"
        "  service: fb\n"
    )
    cfg = load_config(str(p))
    assert cfg.package == "other-pkg"
    assert cfg.private_feed.url == "https://mirror.example.com/artifactory/netfoundry-private-deb"
    assert cfg.private_feed.host == "mirror.example.com"
    assert cfg.private_feed.keyring == "/tmp/keys/netfoundry-private-deb.gpg"
    assert cfg.private_feed.components == ("main", "extra")
    assert cfg.hook.service == "fb"
    assert cfg.paths.sources_dir == "/etc/apt/sources.list.d"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"))


def test_rejects_non_yaml(tmp_path):
    p = tmp_path / "zlan.json"
    p.write_text("{}")
    with pytest.raises(ValueError):
        load_config(str(p))


def test_rejects_non_mapping(tmp_path):
    p = tmp_path / "zlan.yaml"
    p.write_text("- a\n- b\n")
    with pytest.raises(ValueError):
        load_config(str(p))


def test_supported_distros_lowercased():
    assert BootstrapConfig(raw={"supported_distros": ["Debian"]}).supported_distros == ("debian",)


def test_malformed_yaml_is_value_error(tmp_path):
    p = tmp_path / "zlan.yaml"
    p.write_text("paths: [unclosed\n")
    with pytest.raises(ValueError, match="zlan.yaml"):
        load_config(str(p))
