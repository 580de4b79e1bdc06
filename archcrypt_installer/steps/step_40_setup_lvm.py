from __future__ import annotations

import logging

from ..lib.luks_lvm import make_vg_lv
from ..state import InstallState

logger = logging.getLogger(__name__)


class SetupLvmStep:
    step_id = "40_setup_lvm"

    def run(self, state: InstallState) -> InstallState:
        cfg = state.config
        state.require("lvm_part", "20_partition_disk")

        logger.info("Configuring LVM on %s (vg=%s lv=%s)", cfg.mapper_path, cfg.vg_name, cfg.lv_name)
        make_vg_lv(cfg.mapper_path, cfg.vg_name, cfg.lv_name, dry_run=cfg.dry_run)

        state.decide("root_lv", cfg.root_lv_path)
        return state
