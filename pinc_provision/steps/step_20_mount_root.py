from __future__ import annotations

import logging

from ..lib.chroot import chroot_binds
from ..lib.mounts import mount_point, mounted
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class MountRootStep:
    step_id = "20_mount_root"

    def run(self, ctx: ProvisionCtx) -> None:
        if ctx.partition is None:
            raise RuntimeError("No system partition mapped")

        target = ctx.acquire(mount_point(ctx.cfg.mount_point, dry_run=ctx.dry_run))
        ctx.target_root = ctx.acquire(mounted(ctx.partition.path, target, dry_run=ctx.dry_run))
        # /dev, /proc, /sys must be in place before anything runs in the chroot
        ctx.acquire(chroot_binds(ctx.target_root, dry_run=ctx.dry_run))

        logger.info("Mounted %s at %s", ctx.partition.path, ctx.target_root)
