from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)

KEYWORDS = frozenset({"interfaces", "hostapd", "dhcpd", "dhcpd_devices", "iptables", "tc"})


@dataclass(frozen=True)
class Generator:
    """Wrapper around the external configuration generator.

    Each keyword prints one configuration document (or, for iptables, a shell
    script) to stdout. The generator is treated as side-effect free.
    """

    command: Sequence[str]
    dry_run: bool = False

    def generate(self, keyword: str) -> str:
        if keyword not in KEYWORDS:
            raise ValueError(f"Unknown generator keyword {keyword!r} (expected one of {sorted(KEYWORDS)})")
        r = run_cmd([*self.command, keyword], dry_run=self.dry_run)
        if not self.dry_run and not r.stdout.strip():
            logger.warning("Generator produced no output for %s", keyword)
        return r.stdout

    def devices(self) -> str:
        # passed through as-is: one device or a space separated list
        return self.generate("dhcpd_devices").strip()
