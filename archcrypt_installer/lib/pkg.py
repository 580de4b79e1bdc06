from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from .chroot import chroot_cmd
from .command import run_cmd

logger = logging.getLogger(__name__)


def pacstrap(target_root: str, packages: Sequence[str], *, dry_run: bool = False) -> None:
    run_cmd(["pacstrap", target_root, *packages], dry_run=dry_run)


def pacman_install(target_root: str, packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    chroot_cmd(target_root, ["pacman", "-S", "--noconfirm", *packages], dry_run=dry_run)


def append_fstab(target_root: str, *, dry_run: bool = False) -> Path:
    """Append ``genfstab -U`` output for the mounted target to its fstab."""

    fstab = Path(target_root) / "etc/fstab"
    r = run_cmd(["genfstab", "-U", target_root], dry_run=dry_run)
    if dry_run:
        logger.info("Would append to %s", str(fstab))
        return fstab

    fstab.parent.mkdir(parents=True, exist_ok=True)
    with fstab.open("a", encoding="utf-8") as fh:
        fh.write(r.stdout)
    return fstab
