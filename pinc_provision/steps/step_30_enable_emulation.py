from __future__ import annotations

import logging

from ..lib.emulation import binfmt_enabled, interpreter_installed
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class EnableEmulationStep:
    step_id = "30_enable_emulation"

    def run(self, ctx: ProvisionCtx) -> None:
        ctx.acquire(interpreter_installed(ctx.root, ctx.cfg.interpreter, dry_run=ctx.dry_run))
        ctx.acquire(binfmt_enabled(ctx.cfg.binfmt_name, dry_run=ctx.dry_run))
        logger.info("Emulation enabled via %s (%s)", ctx.cfg.interpreter, ctx.cfg.binfmt_name)
