from .step_10_map_image import MapImageStep
from .step_20_mount_root import MountRootStep
from .step_30_enable_emulation import EnableEmulationStep
from .step_40_install_packages import InstallPackagesStep
from .step_50_write_network_config import WriteNetworkConfigStep
from .step_55_install_tc import InstallTrafficControlStep
from .step_60_configure_firewall import ConfigureFirewallStep

__all__ = [
    "MapImageStep",
    "MountRootStep",
    "EnableEmulationStep",
    "InstallPackagesStep",
    "WriteNetworkConfigStep",
    "InstallTrafficControlStep",
    "ConfigureFirewallStep",
]
