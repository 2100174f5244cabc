from __future__ import annotations

import logging
from typing import Sequence

from .chroot import chroot_cmd

logger = logging.getLogger(__name__)

APT_ENV = ["env", "DEBIAN_FRONTEND=noninteractive"]


def apt_update(target_root: str, *, dry_run: bool = False) -> None:
    chroot_cmd(target_root, [*APT_ENV, "apt-get", "update"], dry_run=dry_run)


def apt_install(
    target_root: str,
    packages: Sequence[str],
    *,
    dry_run: bool = False,
) -> None:
    if not packages:
        return
    chroot_cmd(
        target_root,
        [*APT_ENV, "apt-get", "install", "-y", *packages],
        dry_run=dry_run,
    )


def enable_services(target_root: str, services: Sequence[str], *, dry_run: bool = False) -> None:
    # hostapd ships masked on recent Raspberry Pi OS releases
    for svc in services:
        chroot_cmd(target_root, ["systemctl", "unmask", svc], dry_run=dry_run)
        chroot_cmd(target_root, ["systemctl", "enable", svc], dry_run=dry_run)
    logger.info("Enabled services: %s", ", ".join(services))
