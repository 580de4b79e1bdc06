from __future__ import annotations

import logging
from dataclasses import dataclass

from .block import partition_path
from .command import run_cmd, show_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PartitionPlan:
    disk: str
    efi_size: str = "1G"
    efi_start: str = "1MiB"


@dataclass(frozen=True)
class PartitionResult:
    boot_part: str
    lvm_part: str


def partition_disk(*, plan: PartitionPlan, dry_run: bool = False) -> PartitionResult:
    """Create a GPT table with a boot-flagged ESP and an LVM partition.

    Layout:
    - 1: FAT32 ESP from 1MiB to efi_size, boot flag
    - 2: the rest of the disk, lvm flag
    """

    disk = plan.disk
    logger.info("Partitioning disk=%s efi_size=%s", disk, plan.efi_size)

    run_cmd(["parted", "-s", disk, "mklabel", "gpt"], dry_run=dry_run)
    run_cmd(["parted", "-s", disk, "mkpart", "primary", "fat32", plan.efi_start, plan.efi_size], dry_run=dry_run)
    run_cmd(["parted", "-s", disk, "set", "1", "boot", "on"], dry_run=dry_run)
    run_cmd(["parted", "-s", disk, "mkpart", "primary", "ext4", plan.efi_size, "100%"], dry_run=dry_run)
    run_cmd(["parted", "-s", disk, "set", "2", "lvm", "on"], dry_run=dry_run)

    logger.info("New partition table:")
    show_cmd(["parted", "-s", disk, "print"], dry_run=dry_run)

    return PartitionResult(boot_part=partition_path(disk, 1), lvm_part=partition_path(disk, 2))


def format_boot(boot_part: str, *, dry_run: bool = False) -> None:
    run_cmd(["mkfs.fat", "-F32", boot_part], dry_run=dry_run)


def format_root(root_lv: str, *, reserve: str, dry_run: bool = False) -> None:
    """Format the root LV as ext4, then shrink LV and fs together by ``reserve``.

    The freed extents stay in the VG for e2scrub snapshots.
    """

    run_cmd(["mkfs.ext4", root_lv], dry_run=dry_run)
    logger.info("Reserving %s in the volume group for e2scrub snapshots", reserve)
    run_cmd(["lvreduce", "-L", f"-{reserve}", "--resizefs", root_lv, "-y"], dry_run=dry_run)


def mount_target(*, root_lv: str, boot_part: str, target_root: str, dry_run: bool = False) -> None:
    run_cmd(["mount", root_lv, target_root], dry_run=dry_run)
    run_cmd(["mkdir", "-p", f"{target_root}/boot"], dry_run=dry_run)
    run_cmd(["mount", boot_part, f"{target_root}/boot"], dry_run=dry_run)
