from __future__ import annotations

import logging
from typing import Sequence

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)


def chroot_cmd(
    target_root: str,
    argv: Sequence[str],
    *,
    interactive: bool = False,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command inside target root.

    arch-chroot sets up the /dev, /proc and /sys binds itself.
    """

    return run_cmd(["arch-chroot", target_root, *argv], interactive=interactive, dry_run=dry_run)
