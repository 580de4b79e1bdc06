from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    target_root: str = "/mnt"
    log_default: str = "/var/log/archcrypt-installer.log"
    luks_uuid_handoff: str = "root/luks_uuid"
    zoneinfo_dir: str = "/usr/share/zoneinfo"
    consolefonts_dir: str = "usr/share/kbd/consolefonts"


PATHS = Paths()
