from __future__ import annotations

import logging

from ..lib.block import get_uuid
from ..lib.cpu import detect_cpu_vendor, microcode_package
from ..lib.env import PATHS
from ..lib.etcfiles import write_file
from ..lib.pkg import append_fstab, pacman_install, pacstrap
from ..state import InstallState

logger = logging.getLogger(__name__)


class InstallBaseStep:
    step_id = "70_install_base"

    def run(self, state: InstallState) -> InstallState:
        cfg = state.config
        lvm_part = state.require("lvm_part", "20_partition_disk")
        target_root = cfg.target_root

        logger.info("Installing base system into %s", target_root)
        pacstrap(target_root, cfg.packages, dry_run=cfg.dry_run)

        vendor = detect_cpu_vendor(dry_run=cfg.dry_run)
        microcode = microcode_package(vendor)
        state.cpu_vendor = vendor
        state.microcode = microcode
        state.decide("cpu_vendor", vendor)
        state.decide("microcode", microcode)

        if microcode:
            logger.info("Installing %s", microcode)
            pacman_install(target_root, [microcode], dry_run=cfg.dry_run)
        else:
            logger.info("No microcode package for cpu vendor %r", vendor)

        # Read by the bootloader action; it deletes the file afterwards.
        luks_uuid = get_uuid(lvm_part, dry_run=cfg.dry_run)
        state.luks_uuid = luks_uuid
        write_file(target_root, PATHS.luks_uuid_handoff, luks_uuid + "\n", dry_run=cfg.dry_run)

        logger.info("Generating fstab")
        append_fstab(target_root, dry_run=cfg.dry_run)
        return state
