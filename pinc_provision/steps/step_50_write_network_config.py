from __future__ import annotations

import logging

from ..lib.env import PATHS
from ..lib.files import append_lines, patch_assignments, write_file
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class WriteNetworkConfigStep:
    step_id = "50_write_network_config"

    def run(self, ctx: ProvisionCtx) -> None:
        root = ctx.root
        gen = ctx.generator
        dry_run = ctx.dry_run

        write_file(root, PATHS.interfaces, gen.generate("interfaces"), dry_run=dry_run)

        write_file(root, PATHS.hostapd_conf, gen.generate("hostapd"), dry_run=dry_run)
        patch_assignments(
            root,
            PATHS.hostapd_default,
            {"DAEMON_CONF": f'"{PATHS.hostapd_conf}"'},
            dry_run=dry_run,
        )

        write_file(root, PATHS.dhcpd_conf, gen.generate("dhcpd"), dry_run=dry_run)
        devices = gen.devices()
        patch_assignments(
            root,
            PATHS.dhcpd_default,
            {
                "DHCPD_CONF": PATHS.dhcpd_conf,
                "INTERFACESv4": f'"{devices}"',
            },
            dry_run=dry_run,
        )

        append_lines(root, PATHS.sysctl_conf, ctx.cfg.sysctl, dry_run=dry_run)

        logger.info("Access point configured for interfaces: %s", devices or "(none)")
