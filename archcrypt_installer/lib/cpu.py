from __future__ import annotations

import logging
from typing import Optional

from .command import run_cmd

logger = logging.getLogger(__name__)

MICROCODE_BY_VENDOR = {
    "GenuineIntel": "intel-ucode",
    "AuthenticAMD": "amd-ucode",
}


def detect_cpu_vendor(*, dry_run: bool = False) -> Optional[str]:
    """Return the vendor id lscpu reports, or None if it reports none."""

    r = run_cmd(["lscpu"], dry_run=dry_run)
    return parse_vendor(r.stdout)


def parse_vendor(lscpu_output: str) -> Optional[str]:
    for line in lscpu_output.splitlines():
        key, sep, value = line.partition(":")
        if sep and key.strip().lower() == "vendor id":
            return value.strip() or None

    # Older lscpu builds only mention the vendor in free text
    lowered = lscpu_output.lower()
    for vendor in MICROCODE_BY_VENDOR:
        if vendor.lower() in lowered:
            return vendor
    return None


def microcode_package(vendor: Optional[str]) -> Optional[str]:
    if not vendor:
        return None
    return MICROCODE_BY_VENDOR.get(vendor)
