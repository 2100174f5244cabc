from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Mapping, Optional

logger = logging.getLogger(__name__)


def target_path(root: str, rel: str) -> Path:
    """Map an absolute path inside the image onto the mounted root."""
    return Path(root) / rel.lstrip("/")


def write_file(
    root: str,
    rel: str,
    contents: str,
    *,
    mode: Optional[int] = None,
    dry_run: bool = False,
) -> Path:
    p = target_path(root, rel)
    if dry_run:
        logger.info("Would write %s", str(p))
        return p
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(contents, encoding="utf-8")
    if mode is not None:
        p.chmod(mode)
    logger.info("Wrote %s (%d bytes)", str(p), len(contents))
    return p


def append_lines(root: str, rel: str, lines: Iterable[str], *, dry_run: bool = False) -> list[str]:
    """Append lines that are not already present. Returns the lines added."""

    p = target_path(root, rel)
    wanted = list(lines)
    existing = p.read_text(encoding="utf-8") if p.exists() else ""
    present = {line.strip() for line in existing.splitlines()}
    missing = [line for line in wanted if line.strip() not in present]

    if not missing:
        logger.info("%s already contains %s", str(p), wanted)
        return []
    if dry_run:
        logger.info("Would append %s to %s", missing, str(p))
        return missing

    prefix = "" if (not existing or existing.endswith("\n")) else "\n"
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("a", encoding="utf-8") as f:
        f.write(prefix + "\n".join(missing) + "\n")
    logger.info("Appended %s to %s", missing, str(p))
    return missing


def substitute_assignments(text: str, assignments: Mapping[str, str]) -> str:
    """Rewrite KEY=... lines (commented out or not) to KEY=value.

    Keys with no matching line are appended at the end.
    """

    for key, value in assignments.items():
        pattern = re.compile(rf"^#?[ \t]*{re.escape(key)}=.*$", re.M)
        line = f"{key}={value}"
        text, count = pattern.subn(lambda _m: line, text)
        if count == 0:
            if text and not text.endswith("\n"):
                text += "\n"
            text += line + "\n"
    return text


def patch_assignments(
    root: str,
    rel: str,
    assignments: Mapping[str, str],
    *,
    dry_run: bool = False,
) -> Path:
    p = target_path(root, rel)
    if dry_run:
        logger.info("Would patch %s: %s", str(p), dict(assignments))
        return p
    original = p.read_text(encoding="utf-8") if p.exists() else ""
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(substitute_assignments(original, assignments), encoding="utf-8")
    logger.info("Patched %s: %s", str(p), dict(assignments))
    return p
