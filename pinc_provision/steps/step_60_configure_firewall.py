from __future__ import annotations

import logging

from ..lib.env import PATHS
from ..lib.files import write_file
from ..lib.firewall import apply_rules, host_firewall_scope, save_rules
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class ConfigureFirewallStep:
    step_id = "60_configure_firewall"

    def run(self, ctx: ProvisionCtx) -> None:
        script = ctx.generator.generate("iptables")

        # Rules are applied on the host so iptables-save can render them;
        # the host tables are emptied again afterwards.
        with host_firewall_scope(dry_run=ctx.dry_run):
            apply_rules(script, dry_run=ctx.dry_run)
            rules = save_rules(dry_run=ctx.dry_run)

        write_file(ctx.root, PATHS.iptables_rules, rules, dry_run=ctx.dry_run)
        logger.info("Saved firewall rules to %s", PATHS.iptables_rules)
