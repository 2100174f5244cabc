"""pinc provisioner.

Turns a Raspberry Pi disk image into a WiFi access point image:
- Maps and mounts the image, chroots into it under qemu-user emulation
- Installs hostapd and isc-dhcp-server
- Writes network, DHCP, firewall and traffic-control configuration
- Releases every mount, mapping and host change, also on failure
"""

__all__ = []
