from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ImagePaths:
    """Locations written inside the provisioned image."""

    interfaces: str = "/etc/network/interfaces"
    hostapd_conf: str = "/etc/hostapd/hostapd.conf"
    hostapd_default: str = "/etc/default/hostapd"
    dhcpd_conf: str = "/etc/dhcp/dhcpd.conf"
    dhcpd_default: str = "/etc/default/isc-dhcp-server"
    sysctl_conf: str = "/etc/sysctl.conf"
    iptables_rules: str = "/etc/iptables.ipv4.nat"
    tc_script: str = "/opt/pinc/bin/tc"


PATHS = ImagePaths()
