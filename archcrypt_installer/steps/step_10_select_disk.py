from __future__ import annotations

import logging

from ..errors import InstallError
from ..lib.block import is_block_device, list_disks, partition_path
from ..state import InstallState

logger = logging.getLogger(__name__)


class SelectDiskStep:
    step_id = "10_select_disk"

    def run(self, state: InstallState) -> InstallState:
        cfg = state.config

        disk = cfg.disk
        if not disk:
            print("Available disks:")
            print(list_disks(dry_run=cfg.dry_run), end="")
            disk = input("Enter disk to install to (e.g., /dev/sda or /dev/nvme0n1): ").strip()

        if not is_block_device(disk):
            raise InstallError(f"{disk} is not a valid block device")

        if cfg.confirm_destroy:
            answer = input(f"ALL DATA ON {disk} WILL BE DESTROYED. Type the device path again to continue: ")
            if answer.strip() != disk:
                raise InstallError("Confirmation did not match; nothing was changed")

        state.disk = disk
        state.boot_part = partition_path(disk, 1)
        state.lvm_part = partition_path(disk, 2)
        state.decide("disk", disk)

        logger.info("Selected disk=%s boot=%s lvm=%s", disk, state.boot_part, state.lvm_part)
        return state
