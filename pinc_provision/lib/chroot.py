from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Sequence

from .command import CmdResult, run_cmd
from .files import target_path
from .mounts import umount

logger = logging.getLogger(__name__)

BIND_SOURCES = ("/dev", "/proc", "/sys")
PRELOAD_PATH = "/etc/ld.so.preload"
PRELOAD_BACKUP_SUFFIX = ".bak"


def chroot_cmd(target_root: str, argv: Sequence[str], *, dry_run: bool = False) -> CmdResult:
    """Run a command inside target root."""

    return run_cmd(["chroot", target_root, *argv], dry_run=dry_run)


def mount_chroot_binds(target_root: str, *, dry_run: bool = False) -> list[str]:
    """Bind /dev, /proc and /sys into the target root. Returns the mounted paths."""

    mounted: list[str] = []
    try:
        for src in BIND_SOURCES:
            dst = f"{target_root}{src}"
            run_cmd(["mount", "--bind", src, dst], dry_run=dry_run)
            mounted.append(dst)
    except Exception:
        umount_chroot_binds(mounted, dry_run=dry_run)
        raise
    return mounted


def umount_chroot_binds(mounted: Sequence[str], *, dry_run: bool = False) -> None:
    for p in reversed(list(mounted)):
        umount(p, dry_run=dry_run)


@contextmanager
def chroot_binds(target_root: str, *, dry_run: bool = False) -> Iterator[list[str]]:
    mounted = mount_chroot_binds(target_root, dry_run=dry_run)
    try:
        yield mounted
    finally:
        umount_chroot_binds(mounted, dry_run=dry_run)


@contextmanager
def preload_disabled(target_root: str, *, dry_run: bool = False) -> Iterator[bool]:
    """Move ld.so.preload aside while running emulated binaries.

    The preloaded libraries fault with an illegal instruction under qemu-user.
    Yields True if a preload file was moved.
    """

    preload = target_path(target_root, PRELOAD_PATH)
    backup = preload.with_name(preload.name + PRELOAD_BACKUP_SUFFIX)

    if not preload.exists():
        logger.info("No %s in image", PRELOAD_PATH)
        yield False
        return

    if dry_run:
        logger.info("Would move %s -> %s", str(preload), str(backup))
        yield True
        return

    preload.rename(backup)
    logger.info("Disabled %s", PRELOAD_PATH)
    try:
        yield True
    finally:
        backup.rename(preload)
        logger.info("Restored %s", PRELOAD_PATH)
