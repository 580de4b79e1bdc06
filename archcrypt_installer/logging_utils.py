from __future__ import annotations

import logging
from pathlib import Path

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
FALLBACK_LOG_NAME = "archcrypt-installer.log"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def _open_log_file(log_path: str) -> logging.FileHandler:
    """Open the requested log file, or one in the working directory.

    /var/log is read-only on some live media.
    """

    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path)
    except OSError:
        return logging.FileHandler(Path.cwd() / FALLBACK_LOG_NAME)


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    *,
    verbose: bool = False,
    also_console: bool = True,
) -> str:
    """Send the run's log records to a file and the console.

    The console always shows INFO and up. The file gets the same unless
    ``verbose`` is set, in which case it also receives the DEBUG records
    carrying each command's captured stdout/stderr.

    Returns the path of the file actually written.
    """

    root = logging.getLogger()

    if getattr(root, "_archcrypt_log_path", None):
        return root._archcrypt_log_path  # type: ignore[attr-defined]

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)
    file_level = logging.DEBUG if verbose else logging.INFO
    root.setLevel(file_level)

    file_handler = _open_log_file(log_path)
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setLevel(logging.INFO)
        console.setFormatter(fmt)
        root.addHandler(console)

    chosen_path = file_handler.baseFilename
    root._archcrypt_log_path = chosen_path  # type: ignore[attr-defined]

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s, file_level=%s)",
        log_path,
        chosen_path,
        logging.getLevelName(file_level),
    )
    return chosen_path
