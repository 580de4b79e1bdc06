from __future__ import annotations


class InstallError(RuntimeError):
    """Installer-level failure (bad input, missing precondition)."""
