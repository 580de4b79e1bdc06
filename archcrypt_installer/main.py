from __future__ import annotations

import argparse
import logging
from typing import Optional

from .config import load_install_config
from .errors import InstallError
from .lib.command import CommandError
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import run_pipeline
from .state import InstallState
from .steps import (
    ConfigureSystemStep,
    FinalizeStep,
    FormatFilesystemsStep,
    InstallBaseStep,
    MountFilesystemsStep,
    PartitionDiskStep,
    SelectDiskStep,
    SetupEncryptionStep,
    SetupLvmStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        SelectDiskStep(),
        PartitionDiskStep(),
        SetupEncryptionStep(),
        SetupLvmStep(),
        FormatFilesystemsStep(),
        MountFilesystemsStep(),
        InstallBaseStep(),
        ConfigureSystemStep(),
        FinalizeStep(),
    ]


def run(
    *,
    config_path: Optional[str] = None,
    log_path: str = DEFAULT_LOG_PATH,
    disk: Optional[str] = None,
    stop_after: Optional[str] = None,
    dry_run: bool = False,
    assume_yes: bool = False,
    verbose: bool = False,
) -> InstallState:
    """Run the installer pipeline once, front to back."""

    actual_log_path = configure_logging(log_path=log_path, verbose=verbose)

    try:
        cfg = load_install_config(config_path).with_overrides(
            disk=disk,
            dry_run=True if dry_run else None,
            confirm_destroy=False if assume_yes else None,
        )
    except (InstallError, FileNotFoundError):
        logger.exception("Unable to load install config %s", config_path)
        raise

    state = InstallState(config=cfg)
    state.decide("log_path", actual_log_path)

    try:
        result = run_pipeline(state=state, steps=build_steps(), stop_after=stop_after)
    except Exception:
        logger.exception("Installer failed in step %s", state.current_step)
        raise

    result.state.decide("ran_steps", result.ran_steps)
    return result.state


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="archcrypt-installer")
    p.add_argument("--config", default=None, help="Path to install config (yaml)")
    p.add_argument("--disk", default=None, help="Target disk; prompted for when omitted")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--stop-after", default=None, help="Stop after step_id (e.g. 60_mount_fs)")
    p.add_argument("--dry-run", action="store_true", help="Log commands and file writes without running them")
    p.add_argument("--yes", action="store_true", help="Do not ask before destroying the target disk")
    p.add_argument("--verbose", action="store_true", help="Also write captured command output to the log file")

    args = p.parse_args(argv)

    try:
        run(
            config_path=args.config,
            log_path=args.log,
            disk=args.disk,
            stop_after=args.stop_after,
            dry_run=bool(args.dry_run),
            assume_yes=bool(args.yes),
            verbose=bool(args.verbose),
        )
    except CommandError as e:
        return e.returncode or 1
    except (InstallError, FileNotFoundError):
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
