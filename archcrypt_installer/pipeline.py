from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from .errors import InstallError
from .state import InstallState

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single forward-only provisioning step."""

    step_id: str

    def run(self, state: InstallState) -> InstallState:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: InstallState
    ran_steps: List[str]


def run_pipeline(
    *,
    state: InstallState,
    steps: Sequence[Step],
    stop_after: Optional[str] = None,
) -> PipelineResult:
    """Run steps in program order; the first exception aborts the run."""

    if stop_after is not None and stop_after not in {s.step_id for s in steps}:
        raise InstallError(f"Unknown step id for --stop-after: {stop_after}")

    ran: List[str] = []

    for step in steps:
        state.current_step = step.step_id
        logger.info("Running step %s", step.step_id)
        state = step.run(state)
        ran.append(step.step_id)

        if stop_after is not None and step.step_id == stop_after:
            logger.info("Stopping after %s", stop_after)
            break

    state.current_step = None
    return PipelineResult(state=state, ran_steps=ran)
