"""Tests for provision_config.py - YAML configuration."""

import pytest

from pinc_provision.provision_config import ProvisionConfig, load_provision_config


class TestDefaults:
    def test_no_path_gives_defaults(self):
        cfg = load_provision_config(None)
        assert cfg.mount_point == "/mnt/rpi"
        assert cfg.partition_index is None
        assert cfg.interpreter == "/usr/bin/qemu-arm-static"
        assert cfg.binfmt_name == "qemu-arm"
        assert cfg.generator_command == ["jenny"]
        assert cfg.packages == ["hostapd", "isc-dhcp-server"]
        assert cfg.services == ["hostapd", "isc-dhcp-server"]
        assert cfg.sysctl == ["net.ipv4.ip_forward=1"]


class TestLoad:
    def test_partial_override(self, tmp_path):
        p = tmp_path / "pinc.yaml"
        p.write_text("paths:\n  mount_point: /mnt/other\npartition_index: 2\n")
        cfg = load_provision_config(str(p))
        assert cfg.mount_point == "/mnt/other"
        assert cfg.partition_index == 2
        assert cfg.packages == ["hostapd", "isc-dhcp-server"]

    def test_generator_as_string(self):
        cfg = ProvisionConfig(raw={"generator": {"command": "/opt/pinc/bin/jenny"}})
        assert cfg.generator_command == ["/opt/pinc/bin/jenny"]

    def test_empty_file(self, tmp_path):
        p = tmp_path / "pinc.yml"
        p.write_text("")
        assert load_provision_config(str(p)).raw == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_provision_config(str(tmp_path / "missing.yaml"))

    def test_rejects_non_yaml_suffix(self, tmp_path):
        p = tmp_path / "pinc.json"
        p.write_text("{}")
        with pytest.raises(ValueError, match="must be YAML"):
            load_provision_config(str(p))

    def test_rejects_non_mapping(self, tmp_path):
        p = tmp_path / "pinc.yaml"
        p.write_text("- hostapd\n")
        with pytest.raises(ValueError, match="mapping"):
            load_provision_config(str(p))

    def test_malformed_yaml(self, tmp_path):
        p = tmp_path / "pinc.yaml"
        p.write_text("paths: [unclosed\n")
        with pytest.raises(ValueError, match="invalid provision config"):
            load_provision_config(str(p))

    @pytest.mark.parametrize(
        "body",
        [
            "emulation: foo\n",
            "paths: /mnt/rpi\n",
            "generator: [jenny]\n",
            "packages: hostapd\n",
            "partition_index: two\n",
            "partition_index: true\n",
        ],
    )
    def test_rejects_wrong_section_types(self, tmp_path, body):
        p = tmp_path / "pinc.yaml"
        p.write_text(body)
        with pytest.raises(ValueError, match="invalid provision config"):
            load_provision_config(str(p))
