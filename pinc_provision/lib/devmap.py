from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional

from .command import run_cmd

logger = logging.getLogger(__name__)

_ADD_MAP_RE = re.compile(r"^add map (?P<name>\S+)\s")
_PART_NUM_RE = re.compile(r"p(?P<num>\d+)$")


@dataclass(frozen=True)
class MappedPartition:
    name: str
    index: int

    @property
    def path(self) -> str:
        return f"/dev/mapper/{self.name}"


def parse_kpartx_output(output: str) -> List[MappedPartition]:
    """Parse `kpartx -av` output into partitions.

    Each mapping is reported as:
      add map loop0p2 (253:1): 0 3645440 linear 7:0 532480
    Other lines are ignored.
    """

    parts: List[MappedPartition] = []
    for line in output.splitlines():
        m = _ADD_MAP_RE.match(line.strip())
        if not m:
            continue
        name = m.group("name")
        n = _PART_NUM_RE.search(name)
        if not n:
            raise RuntimeError(f"Unable to determine partition number of mapping {name!r}")
        parts.append(MappedPartition(name=name, index=int(n.group("num"))))
    return parts


def select_system_partition(
    parts: List[MappedPartition],
    *,
    index: Optional[int] = None,
) -> MappedPartition:
    if not parts:
        raise RuntimeError("kpartx reported no partition mappings")

    if index is None:
        return max(parts, key=lambda p: p.index)

    for p in parts:
        if p.index == index:
            return p
    raise RuntimeError(
        f"Partition {index} not found in mappings: {', '.join(p.name for p in parts)}"
    )


@contextmanager
def mapped_image(
    image: str,
    *,
    index: Optional[int] = None,
    dry_run: bool = False,
) -> Iterator[MappedPartition]:
    """Map the image partitions and yield the system partition.

    The mapping is removed on exit.
    """

    r = run_cmd(["kpartx", "-avs", image], dry_run=dry_run)
    try:
        if dry_run:
            part = MappedPartition(name="loop0p2", index=2)
        else:
            part = select_system_partition(parse_kpartx_output(r.stdout), index=index)
        logger.info("System partition: %s (%s)", part.name, part.path)
        yield part
    finally:
        r = run_cmd(["kpartx", "-d", image], check=False, dry_run=dry_run)
        if r.returncode != 0:
            logger.warning("Unable to remove partition mappings for %s: %s", image, r.stderr.strip())
