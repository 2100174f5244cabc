from __future__ import annotations

import logging

from ..lib.devmap import mapped_image
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class MapImageStep:
    step_id = "10_map_image"

    def run(self, ctx: ProvisionCtx) -> None:
        ctx.partition = ctx.acquire(
            mapped_image(ctx.image, index=ctx.cfg.partition_index, dry_run=ctx.dry_run)
        )
        logger.info("Mapped %s -> %s", ctx.image, ctx.partition.path)
