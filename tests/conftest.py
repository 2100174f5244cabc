"""Shared fixtures: a fake command runner so no external tool is executed."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple
from unittest.mock import patch

import pytest

from pinc_provision.lib.command import CmdResult, CommandError

PATCHED_MODULES = [
    "pinc_provision.lib.command",
    "pinc_provision.lib.devmap",
    "pinc_provision.lib.mounts",
    "pinc_provision.lib.chroot",
    "pinc_provision.lib.emulation",
    "pinc_provision.lib.generator",
    "pinc_provision.lib.firewall",
]

KPARTX_OUTPUT = (
    "add map loop0p1 (253:0): 0 524288 linear 7:0 8192\n"
    "add map loop0p2 (253:1): 0 3645440 linear 7:0 532480\n"
)


class FakeRunner:
    """Records commands and answers them from prefix-matched responses."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.inputs: List[Optional[str]] = []
        self.responses: List[Tuple[Tuple[str, ...], str]] = []
        self.failures: Dict[Tuple[str, ...], int] = {}

    def respond(self, prefix: Sequence[str], stdout: str) -> None:
        self.responses.append((tuple(prefix), stdout))

    def fail(self, prefix: Sequence[str], returncode: int = 100) -> None:
        self.failures[tuple(prefix)] = returncode

    @staticmethod
    def _matches(argv: List[str], prefix: Tuple[str, ...]) -> bool:
        return tuple(argv[: len(prefix)]) == prefix

    def __call__(self, argv, *, check=True, env=None, cwd=None, input_text=None, dry_run=False):
        argv_list = list(argv)
        self.calls.append(argv_list)
        self.inputs.append(input_text)

        for prefix, rc in self.failures.items():
            if self._matches(argv_list, prefix):
                if check:
                    raise CommandError(argv_list, rc, "simulated failure")
                return CmdResult(argv=argv_list, returncode=rc, stdout="", stderr="simulated failure")

        stdout = ""
        for prefix, out in self.responses:
            if self._matches(argv_list, prefix):
                stdout = out
                break
        return CmdResult(argv=argv_list, returncode=0, stdout=stdout, stderr="")

    def index(self, argv: Sequence[str]) -> int:
        """Index of the last call equal to argv."""
        target = list(argv)
        for i in range(len(self.calls) - 1, -1, -1):
            if self.calls[i] == target:
                return i
        raise AssertionError(f"{target} was not called; calls: {self.calls}")

    def called(self, argv: Sequence[str]) -> bool:
        return list(argv) in self.calls


@pytest.fixture
def fake_cmd():
    runner = FakeRunner()
    patches = [patch(f"{mod}.run_cmd", runner) for mod in PATCHED_MODULES]
    for p in patches:
        p.start()
    try:
        yield runner
    finally:
        for p in patches:
            p.stop()
