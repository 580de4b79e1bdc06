from __future__ import annotations

import logging

from ..lib.storage import format_boot, format_root
from ..state import InstallState

logger = logging.getLogger(__name__)


class FormatFilesystemsStep:
    step_id = "50_format_fs"

    def run(self, state: InstallState) -> InstallState:
        cfg = state.config
        boot_part = state.require("boot_part", "20_partition_disk")

        logger.info("Formatting filesystems")
        format_boot(boot_part, dry_run=cfg.dry_run)
        format_root(cfg.root_lv_path, reserve=cfg.root_reserve, dry_run=cfg.dry_run)

        state.decide("root_reserve", cfg.root_reserve)
        return state
