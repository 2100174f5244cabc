from __future__ import annotations

import logging
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .command import run_cmd
from .files import target_path

logger = logging.getLogger(__name__)

BINFMT_MISC_DIR = "/proc/sys/fs/binfmt_misc"


def binfmt_status(name: str, *, binfmt_dir: str = BINFMT_MISC_DIR) -> Optional[bool]:
    """Return True/False for an enabled/disabled registration, None if unknown."""

    p = Path(binfmt_dir) / name
    try:
        first = p.read_text(encoding="utf-8").splitlines()[0].strip()
    except (OSError, IndexError):
        return None
    if first == "enabled":
        return True
    if first == "disabled":
        return False
    return None


@contextmanager
def interpreter_installed(target_root: str, interpreter: str, *, dry_run: bool = False) -> Iterator[Path]:
    """Copy the static emulation interpreter into the image.

    Removed again on exit unless the image already shipped one.
    """

    src = Path(interpreter)
    dst = target_path(target_root, interpreter)

    if dry_run:
        logger.info("Would copy %s -> %s", str(src), str(dst))
        yield dst
        return

    if not src.exists():
        raise RuntimeError(f"Emulation interpreter missing on host: {interpreter} (install qemu-user-static)")

    preexisting = dst.exists()
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dst)
    logger.info("Installed %s into image", interpreter)
    try:
        yield dst
    finally:
        if not preexisting:
            try:
                dst.unlink()
                logger.info("Removed %s from image", interpreter)
            except OSError as e:
                logger.warning("Unable to remove %s: %s", str(dst), e)


@contextmanager
def binfmt_enabled(
    name: str,
    *,
    binfmt_dir: str = BINFMT_MISC_DIR,
    dry_run: bool = False,
) -> Iterator[None]:
    """Enable a binfmt_misc registration, restoring the previous state on exit."""

    before = None if dry_run else binfmt_status(name, binfmt_dir=binfmt_dir)
    logger.info("binfmt %s status before run: %s", name, before)

    run_cmd(["update-binfmts", "--enable", name], dry_run=dry_run)
    try:
        yield
    finally:
        if before is False:
            r = run_cmd(["update-binfmts", "--disable", name], check=False, dry_run=dry_run)
            if r.returncode != 0:
                logger.warning("Unable to disable binfmt %s: %s", name, r.stderr.strip())
