from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from .command import run_cmd, run_shell

logger = logging.getLogger(__name__)

TABLES = ("filter", "nat", "mangle")
CHAINS = ("INPUT", "FORWARD", "OUTPUT")


def reset_host_firewall(*, check: bool = True, dry_run: bool = False) -> None:
    """Flush filter/nat/mangle and set permissive default policies."""

    for table in TABLES:
        run_cmd(["iptables", "-t", table, "-F"], check=check, dry_run=dry_run)
        run_cmd(["iptables", "-t", table, "-X"], check=check, dry_run=dry_run)
    for chain in CHAINS:
        run_cmd(["iptables", "-P", chain, "ACCEPT"], check=check, dry_run=dry_run)
    logger.info("Host firewall reset")


def apply_rules(script: str, *, dry_run: bool = False) -> None:
    run_shell(script, dry_run=dry_run)


def save_rules(*, dry_run: bool = False) -> str:
    return run_cmd(["iptables-save"], dry_run=dry_run).stdout


@contextmanager
def host_firewall_scope(*, dry_run: bool = False) -> Iterator[None]:
    """Start from empty host tables and always leave them empty again."""

    reset_host_firewall(dry_run=dry_run)
    try:
        yield
    finally:
        reset_host_firewall(check=False, dry_run=dry_run)
