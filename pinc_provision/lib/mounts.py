from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .command import run_cmd

logger = logging.getLogger(__name__)


def umount(path: str, *, lazy: bool = True, dry_run: bool = False) -> None:
    argv = ["umount", "-lf", path] if lazy else ["umount", path]
    r = run_cmd(argv, check=False, dry_run=dry_run)
    if r.returncode != 0:
        logger.warning("Unable to unmount %s: %s", path, r.stderr.strip())


@contextmanager
def mount_point(path: str, *, dry_run: bool = False) -> Iterator[str]:
    """Create the mount point directory; remove it on exit if it was created here."""

    p = Path(path)
    created = not p.exists()
    if dry_run:
        logger.info("Would create mount point %s", path)
    elif created:
        p.mkdir(parents=True)
    try:
        yield path
    finally:
        if created and not dry_run:
            try:
                p.rmdir()
            except OSError as e:
                logger.warning("Unable to remove mount point %s: %s", path, e)


@contextmanager
def mounted(device: str, target: str, *, dry_run: bool = False) -> Iterator[str]:
    run_cmd(["mount", device, target], dry_run=dry_run)
    try:
        yield target
    finally:
        # non-lazy: the device must be free before kpartx -d
        run_cmd(["sync"], check=False, dry_run=dry_run)
        umount(target, lazy=False, dry_run=dry_run)
