from __future__ import annotations

import logging

from ..lib.env import PATHS
from ..lib.files import write_file
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class InstallTrafficControlStep:
    step_id = "55_install_tc"

    def run(self, ctx: ProvisionCtx) -> None:
        write_file(
            ctx.root,
            PATHS.tc_script,
            ctx.generator.generate("tc"),
            mode=0o755,
            dry_run=ctx.dry_run,
        )
        logger.info("Installed traffic control script at %s", PATHS.tc_script)
