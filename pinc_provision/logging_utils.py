from __future__ import annotations

import logging
from pathlib import Path

DEFAULT_LOG_PATH = "/var/log/pinc-provision.log"
FALLBACK_LOG_NAME = "pinc-provision.log"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def _open_log_file(log_path: str) -> logging.FileHandler:
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path)
    except OSError:
        return logging.FileHandler(str(Path.cwd() / FALLBACK_LOG_NAME))


def configure_logging(log_path: str = DEFAULT_LOG_PATH, level: int = logging.INFO) -> str:
    """Send the provisioning log to a file and the console.

    Every command run on the host or in the chroot is recorded. When the
    requested log file cannot be opened the log goes to ./pinc-provision.log.

    Returns the log file actually used.
    """

    root = logging.getLogger()
    root.setLevel(level)

    existing = getattr(root, "_pinc_log_path", None)
    if existing:
        return existing

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    file_handler = _open_log_file(log_path)
    console = logging.StreamHandler()
    for h in (file_handler, console):
        h.setFormatter(fmt)
        root.addHandler(h)

    chosen_path = file_handler.baseFilename
    setattr(root, "_pinc_log_path", chosen_path)

    logging.getLogger(__name__).info("Logging to %s (requested %s)", chosen_path, log_path)
    return chosen_path
