from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from .lib.command import CommandError
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import PipelineResult, ProvisionCtx, run_pipeline
from .provision_config import load_provision_config
from .steps import (
    ConfigureFirewallStep,
    EnableEmulationStep,
    InstallPackagesStep,
    InstallTrafficControlStep,
    MapImageStep,
    MountRootStep,
    WriteNetworkConfigStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        MapImageStep(),
        MountRootStep(),
        EnableEmulationStep(),
        InstallPackagesStep(),
        WriteNetworkConfigStep(),
        InstallTrafficControlStep(),
        ConfigureFirewallStep(),
    ]


def resolve_image(path: Optional[str]) -> Optional[Path]:
    """Return the absolute image path, or None if it is not an existing file."""

    if not path:
        return None
    p = Path(path)
    if not p.is_absolute():
        p = Path.cwd() / p
    if not p.is_file():
        return None
    return p


def provision(
    *,
    image: str,
    config_path: Optional[str] = None,
    dry_run: bool = False,
) -> PipelineResult:
    """Provision a Raspberry Pi image as a WiFi access point in place."""

    cfg = load_provision_config(config_path)
    ctx = ProvisionCtx(cfg=cfg, image=image, dry_run=dry_run)

    logger.info("Provisioning %s (dry_run=%s)", image, dry_run)
    result = run_pipeline(ctx=ctx, steps=build_steps())
    logger.info("Provisioned %s (steps: %s)", image, ", ".join(result.ran_steps))
    return result


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pinc-provision",
        description="Provision a Raspberry Pi image as a WiFi access point.",
    )
    p.add_argument("image", nargs="?", help="Path to the Raspberry Pi disk image")
    p.add_argument("--config", default=None, help="YAML provisioning config")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to provisioning log")
    p.add_argument("--dry-run", action="store_true", help="Log commands without running them")
    p.add_argument("-v", "--verbose", action="store_true", help="Log command output")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    image = resolve_image(args.image)
    if image is None:
        if args.image:
            print(f"Image not found: {args.image}")
        p.print_help()
        return 1

    configure_logging(
        log_path=args.log,
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    try:
        provision(image=str(image), config_path=args.config, dry_run=bool(args.dry_run))
    except CommandError as e:
        return e.returncode or 1
    except (RuntimeError, ValueError, OSError) as e:
        logger.error("Provisioning failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
