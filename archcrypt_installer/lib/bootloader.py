from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .chroot import chroot_cmd

logger = logging.getLogger(__name__)

# Checked in order; the first image present in /boot is referenced.
MICROCODE_IMAGES = ("intel-ucode.img", "amd-ucode.img")


def install_systemd_boot(*, target_root: str, dry_run: bool = False) -> None:
    """Install systemd-boot into the ESP mounted at /boot."""

    chroot_cmd(target_root, ["bootctl", "install"], dry_run=dry_run)
    logger.info("systemd-boot installed")


def find_microcode_image(target_root: str) -> Optional[str]:
    boot = Path(target_root) / "boot"
    for image in MICROCODE_IMAGES:
        if (boot / image).is_file():
            return image
    return None


def render_loader_conf(*, default: str = "arch", timeout: int = 3) -> str:
    return (
        f"default {default}\n"
        f"timeout {timeout}\n"
        "console-mode keep\n"
        "editor no\n"
    )


def render_boot_entry(
    *,
    luks_uuid: str,
    crypt_name: str,
    root_device: str,
    microcode_image: Optional[str] = None,
    title: str = "Arch Linux",
) -> str:
    """Render a loader entry that unlocks the LUKS root through sd-encrypt."""

    lines = [
        f"title {title}",
        "linux /vmlinuz-linux",
    ]
    if microcode_image:
        lines.append(f"initrd /{microcode_image}")
    lines.append("initrd /initramfs-linux.img")
    lines.append(f"options rd.luks.name={luks_uuid}={crypt_name} root={root_device} rw")
    return "\n".join(lines) + "\n"
