from __future__ import annotations

import logging
from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import ContextManager, List, Optional, Protocol, Sequence, TypeVar

from .lib.devmap import MappedPartition
from .lib.generator import Generator
from .provision_config import ProvisionConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ProvisionCtx:
    cfg: ProvisionConfig
    image: str
    dry_run: bool = False
    stack: ExitStack = field(default_factory=ExitStack)
    partition: Optional[MappedPartition] = None
    target_root: Optional[str] = None

    @property
    def root(self) -> str:
        if not self.target_root:
            raise RuntimeError("Target root is not mounted yet")
        return self.target_root

    @property
    def generator(self) -> Generator:
        return Generator(command=self.cfg.generator_command, dry_run=self.dry_run)

    def acquire(self, cm: ContextManager[T]) -> T:
        """Enter a resource and release it when the run ends, in reverse order."""
        return self.stack.enter_context(cm)


class Step(Protocol):
    """A single provisioning step."""

    step_id: str

    def run(self, ctx: ProvisionCtx) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]


def run_pipeline(*, ctx: ProvisionCtx, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order; release every acquired resource on any exit."""

    ran: List[str] = []
    current: Optional[str] = None

    with ctx.stack:
        try:
            for step in steps:
                current = step.step_id
                logger.info("Running step %s", step.step_id)
                step.run(ctx)
                ran.append(step.step_id)
        except Exception:
            logger.exception("Step %s failed; releasing acquired resources", current)
            raise
        finally:
            logger.info("Releasing resources")

    return PipelineResult(ran_steps=ran)
