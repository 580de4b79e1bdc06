"""Arch Linux installer for a LUKS + LVM root booted by systemd-boot.

Core design goals:
- One forward-only pipeline of steps
- Explicit configuration passed between steps
- Every external command logged
- Abort on the first failing command
"""

__all__ = []
