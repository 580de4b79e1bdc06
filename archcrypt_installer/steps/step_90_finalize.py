from __future__ import annotations

import logging

from ..state import InstallState

logger = logging.getLogger(__name__)


class FinalizeStep:
    step_id = "90_finalize"

    def run(self, state: InstallState) -> InstallState:
        logger.info("Finalize summary: %s", state.decisions)

        print("Installation complete!")
        print("You can now reboot with:")
        print(f"   umount -R {state.target_root}")
        print("   reboot")
        print("Remember to remove installation media.")
        return state
