"""LUKS container and LVM stack on top of the data partition."""

from __future__ import annotations

import logging

from .command import run_cmd, show_cmd

logger = logging.getLogger(__name__)


def format_luks(part: str, *, dry_run: bool = False) -> None:
    # cryptsetup asks for YES and the passphrase on the terminal
    run_cmd(["cryptsetup", "luksFormat", part], interactive=True, dry_run=dry_run)


def open_luks(part: str, name: str, *, dry_run: bool = False) -> None:
    run_cmd(["cryptsetup", "open", part, name], interactive=True, dry_run=dry_run)


def make_vg_lv(mapper_path: str, vg: str, lv: str, *, size: str = "100%FREE", dry_run: bool = False) -> None:
    run_cmd(["pvcreate", mapper_path], dry_run=dry_run)
    run_cmd(["vgcreate", vg, mapper_path], dry_run=dry_run)
    run_cmd(["lvcreate", "-l", size, "-n", lv, vg], dry_run=dry_run)

    logger.info("Logical volumes created:")
    show_cmd(["lvs"], dry_run=dry_run)
