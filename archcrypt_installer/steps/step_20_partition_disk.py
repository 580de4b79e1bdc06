from __future__ import annotations

import logging

from ..lib.storage import PartitionPlan, partition_disk
from ..state import InstallState

logger = logging.getLogger(__name__)


class PartitionDiskStep:
    step_id = "20_partition_disk"

    def run(self, state: InstallState) -> InstallState:
        disk = state.require("disk", "10_select_disk")

        plan = PartitionPlan(disk=disk, efi_size=state.config.efi_size)
        result = partition_disk(plan=plan, dry_run=state.dry_run)

        state.boot_part = result.boot_part
        state.lvm_part = result.lvm_part

        logger.info("Partitioned %s (boot=%s lvm=%s)", disk, result.boot_part, result.lvm_part)
        return state
