from __future__ import annotations

import logging
import os
import stat

from ..errors import InstallError
from .command import run_cmd, show_cmd

logger = logging.getLogger(__name__)


def list_disks(*, dry_run: bool = False) -> str:
    """Return the ``lsblk`` disk listing shown before the disk prompt."""

    r = run_cmd(["lsblk", "-d", "-p", "-n", "-l", "-o", "NAME,SIZE"], dry_run=dry_run)
    return r.stdout


def is_block_device(path: str) -> bool:
    try:
        return stat.S_ISBLK(os.stat(path).st_mode)
    except OSError:
        return False


def partition_path(disk: str, n: int) -> str:
    # nvme/mmcblk devices use p suffix
    if disk.endswith(tuple("0123456789")):
        return f"{disk}p{n}"
    return f"{disk}{n}"


def get_uuid(dev: str, *, dry_run: bool = False) -> str:
    """Return the UUID blkid reports for a block device."""

    r = run_cmd(["blkid", "-s", "UUID", "-o", "value", dev], dry_run=dry_run)
    uuid = (r.stdout or "").strip()
    if not uuid and not dry_run:
        raise InstallError(f"Unable to determine UUID for {dev}")
    return uuid


def show_layout(*, dry_run: bool = False) -> None:
    logger.info("Mounted filesystems:")
    show_cmd(["lsblk"], dry_run=dry_run)
