from __future__ import annotations

import logging
from typing import Sequence, Tuple

from ..lib.sysconfig import CONFIGURE_ACTIONS, Action
from ..state import InstallState

logger = logging.getLogger(__name__)


class ConfigureSystemStep:
    step_id = "80_configure_system"

    def __init__(self, actions: Sequence[Tuple[str, Action]] = CONFIGURE_ACTIONS) -> None:
        self.actions = actions

    def run(self, state: InstallState) -> InstallState:
        logger.info("Configuring system in %s", state.target_root)
        for name, action in self.actions:
            logger.info("Configure: %s", name)
            action(state)
        return state
