from __future__ import annotations

import logging

from ..lib.block import show_layout
from ..lib.storage import mount_target
from ..state import InstallState

logger = logging.getLogger(__name__)


class MountFilesystemsStep:
    step_id = "60_mount_fs"

    def run(self, state: InstallState) -> InstallState:
        cfg = state.config
        boot_part = state.require("boot_part", "20_partition_disk")

        logger.info("Mounting %s at %s", cfg.root_lv_path, cfg.target_root)
        mount_target(
            root_lv=cfg.root_lv_path,
            boot_part=boot_part,
            target_root=cfg.target_root,
            dry_run=cfg.dry_run,
        )
        show_layout(dry_run=cfg.dry_run)
        return state
