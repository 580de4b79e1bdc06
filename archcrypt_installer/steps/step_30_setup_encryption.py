from __future__ import annotations

import logging

from ..lib.luks_lvm import format_luks, open_luks
from ..state import InstallState

logger = logging.getLogger(__name__)


class SetupEncryptionStep:
    step_id = "30_setup_encryption"

    def run(self, state: InstallState) -> InstallState:
        cfg = state.config
        lvm_part = state.require("lvm_part", "20_partition_disk")

        logger.info("Setting up LUKS encryption on %s", lvm_part)
        format_luks(lvm_part, dry_run=cfg.dry_run)
        open_luks(lvm_part, cfg.crypt_device_name, dry_run=cfg.dry_run)

        state.decide("mapper", cfg.mapper_path)
        return state
