from __future__ import annotations

import logging

from ..lib.chroot import preload_disabled
from ..lib.pkg import apt_install, apt_update, enable_services
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class InstallPackagesStep:
    step_id = "40_install_packages"

    def run(self, ctx: ProvisionCtx) -> None:
        root = ctx.root
        with preload_disabled(root, dry_run=ctx.dry_run):
            apt_update(root, dry_run=ctx.dry_run)
            apt_install(root, ctx.cfg.packages, dry_run=ctx.dry_run)
            enable_services(root, ctx.cfg.services, dry_run=ctx.dry_run)

        logger.info("Installed packages: %s", ", ".join(ctx.cfg.packages))
