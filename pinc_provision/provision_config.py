from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

DEFAULT_MOUNT_POINT = "/mnt/rpi"
DEFAULT_INTERPRETER = "/usr/bin/qemu-arm-static"
DEFAULT_BINFMT_NAME = "qemu-arm"
DEFAULT_GENERATOR = ["jenny"]
DEFAULT_PACKAGES = ["hostapd", "isc-dhcp-server"]
DEFAULT_SERVICES = ["hostapd", "isc-dhcp-server"]
DEFAULT_SYSCTL = ["net.ipv4.ip_forward=1"]

MAPPING_SECTIONS = ("paths", "emulation", "generator")
LIST_SECTIONS = ("packages", "services", "sysctl")


@dataclass(frozen=True)
class ProvisionConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def mount_point(self) -> str:
        return str(((self.raw.get("paths") or {}).get("mount_point")) or DEFAULT_MOUNT_POINT)

    @property
    def partition_index(self) -> Optional[int]:
        value = self.raw.get("partition_index")
        return None if value is None else int(value)

    @property
    def interpreter(self) -> str:
        return str(((self.raw.get("emulation") or {}).get("interpreter")) or DEFAULT_INTERPRETER)

    @property
    def binfmt_name(self) -> str:
        return str(((self.raw.get("emulation") or {}).get("binfmt_name")) or DEFAULT_BINFMT_NAME)

    @property
    def generator_command(self) -> List[str]:
        cmd = (self.raw.get("generator") or {}).get("command") or DEFAULT_GENERATOR
        if isinstance(cmd, str):
            return [cmd]
        return [str(c) for c in cmd]

    @property
    def packages(self) -> List[str]:
        return [str(p) for p in (self.raw.get("packages") or DEFAULT_PACKAGES)]

    @property
    def services(self) -> List[str]:
        return [str(s) for s in (self.raw.get("services") or DEFAULT_SERVICES)]

    @property
    def sysctl(self) -> List[str]:
        return [str(s) for s in (self.raw.get("sysctl") or DEFAULT_SYSCTL)]


def load_provision_config(path: Optional[str]) -> ProvisionConfig:
    """Load a YAML provisioning config; no path means all defaults."""

    if path is None:
        return ProvisionConfig()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("provision config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the provision config") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"invalid provision config {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError("provision config must contain a mapping/object")

    for key in MAPPING_SECTIONS:
        if raw.get(key) is not None and not isinstance(raw[key], dict):
            raise ValueError(f"invalid provision config: {key} must be a mapping")
    for key in LIST_SECTIONS:
        if raw.get(key) is not None and not isinstance(raw[key], list):
            raise ValueError(f"invalid provision config: {key} must be a list")
    pi = raw.get("partition_index")
    if pi is not None and (isinstance(pi, bool) or not isinstance(pi, int)):
        raise ValueError("invalid provision config: partition_index must be an integer")

    return ProvisionConfig(raw=raw)
