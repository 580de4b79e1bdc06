from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .config import InstallConfig
from .errors import InstallError


@dataclass
class InstallState:
    """What earlier steps produced for later ones."""

    config: InstallConfig
    disk: Optional[str] = None
    boot_part: Optional[str] = None
    lvm_part: Optional[str] = None
    luks_uuid: Optional[str] = None
    cpu_vendor: Optional[str] = None
    microcode: Optional[str] = None
    current_step: Optional[str] = None
    decisions: Dict[str, Any] = field(default_factory=dict)

    @property
    def dry_run(self) -> bool:
        return self.config.dry_run

    @property
    def target_root(self) -> str:
        return self.config.target_root

    def require(self, attr: str, producer: str) -> str:
        value = getattr(self, attr)
        if not value:
            raise InstallError(f"state.{attr} missing; run {producer} first")
        return value

    def decide(self, key: str, value: Any) -> None:
        self.decisions[key] = value
