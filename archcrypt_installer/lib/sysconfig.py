"""System configuration actions run against the staged root.

Each action takes the install state, touches one concern of the new system and
is safe to call on its own. ``CONFIGURE_ACTIONS`` fixes the order the
configure step runs them in.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence, Tuple

from ..errors import InstallError
from ..state import InstallState
from .block import get_uuid
from .bootloader import find_microcode_image, install_systemd_boot, render_boot_entry, render_loader_conf
from .chroot import chroot_cmd
from .env import PATHS
from .etcfiles import append_file, render_hosts, rewrite_hooks, target_path, uncomment_locale, write_file
from .pkg import pacman_install

logger = logging.getLogger(__name__)

Action = Callable[[InstallState], None]


def set_timezone(state: InstallState) -> None:
    cfg = state.config
    root = cfg.target_root
    chroot_cmd(root, ["ln", "-sf", f"{PATHS.zoneinfo_dir}/{cfg.timezone}", "/etc/localtime"], dry_run=cfg.dry_run)
    chroot_cmd(root, ["hwclock", "--systohc"], dry_run=cfg.dry_run)


def configure_locale(state: InstallState) -> None:
    cfg = state.config
    root = cfg.target_root
    entry = cfg.locale_gen_entry

    locale_gen = target_path(root, "/etc/locale.gen")
    if cfg.dry_run:
        logger.info("Would uncomment %r in %s", entry, str(locale_gen))
    else:
        if not locale_gen.is_file():
            raise InstallError(f"{locale_gen} not found; was the base system installed?")
        text, changed = uncomment_locale(locale_gen.read_text(encoding="utf-8"), entry)
        if changed:
            locale_gen.write_text(text, encoding="utf-8")
            logger.info("Uncommented %r in locale.gen", entry)
        else:
            logger.warning("No commented %r line in locale.gen; leaving it untouched", entry)

    chroot_cmd(root, ["locale-gen"], dry_run=cfg.dry_run)
    write_file(root, "/etc/locale.conf", f"LANG={cfg.locale}\n", dry_run=cfg.dry_run)
    state.decide("locale", cfg.locale)


def configure_console(state: InstallState) -> None:
    cfg = state.config
    root = cfg.target_root

    write_file(root, "/etc/vconsole.conf", f"KEYMAP={cfg.keymap}\n", dry_run=cfg.dry_run)

    font_file = target_path(root, f"{PATHS.consolefonts_dir}/{cfg.console_font}.psfu.gz")
    if font_file.is_file():
        font = cfg.console_font
    else:
        logger.warning("Console font %s not found, installing %s", cfg.console_font, cfg.fallback_font_package)
        pacman_install(root, [cfg.fallback_font_package], dry_run=cfg.dry_run)
        font = cfg.fallback_font

    append_file(root, "/etc/vconsole.conf", f"FONT={font}\n", dry_run=cfg.dry_run)
    state.decide("console_font", font)


def configure_network_identity(state: InstallState) -> None:
    cfg = state.config
    write_file(cfg.target_root, "/etc/hostname", cfg.hostname + "\n", dry_run=cfg.dry_run)
    append_file(cfg.target_root, "/etc/hosts", render_hosts(cfg.hostname), dry_run=cfg.dry_run)
    state.decide("hostname", cfg.hostname)


def configure_initramfs(state: InstallState) -> None:
    cfg = state.config
    root = cfg.target_root

    conf = target_path(root, "/etc/mkinitcpio.conf")
    if cfg.dry_run:
        logger.info("Would set HOOKS=(%s) in %s", " ".join(cfg.initramfs_hooks), str(conf))
    else:
        if not conf.is_file():
            raise InstallError(f"{conf} not found; is mkinitcpio installed?")
        text, changed = rewrite_hooks(conf.read_text(encoding="utf-8"), cfg.initramfs_hooks)
        if not changed:
            raise InstallError(f"No HOOKS=(...) line in {conf}")
        conf.write_text(text, encoding="utf-8")

    chroot_cmd(root, ["mkinitcpio", "-P"], dry_run=cfg.dry_run)


def resolve_luks_uuid(state: InstallState) -> str:
    """Take the UUID handed over by the base install, else ask blkid."""

    cfg = state.config
    handoff = target_path(cfg.target_root, PATHS.luks_uuid_handoff)
    if handoff.is_file():
        uuid = handoff.read_text(encoding="utf-8").strip()
        handoff.unlink()
        if uuid:
            return uuid

    lvm_part = state.require("lvm_part", "20_partition_disk")
    return get_uuid(lvm_part, dry_run=cfg.dry_run)


def configure_bootloader(state: InstallState) -> None:
    cfg = state.config
    root = cfg.target_root

    install_systemd_boot(target_root=root, dry_run=cfg.dry_run)
    write_file(root, "/boot/loader/loader.conf", render_loader_conf(timeout=cfg.loader_timeout), dry_run=cfg.dry_run)

    luks_uuid = resolve_luks_uuid(state)
    microcode_image = find_microcode_image(root)
    entry = render_boot_entry(
        luks_uuid=luks_uuid,
        crypt_name=cfg.crypt_device_name,
        root_device=cfg.root_lv_path,
        microcode_image=microcode_image,
    )
    write_file(root, "/boot/loader/entries/arch.conf", entry, dry_run=cfg.dry_run)

    state.luks_uuid = luks_uuid
    state.decide("microcode_initrd", microcode_image)


def enable_services(state: InstallState) -> None:
    cfg = state.config
    for unit in cfg.services:
        chroot_cmd(cfg.target_root, ["systemctl", "enable", unit], dry_run=cfg.dry_run)
    state.decide("services", list(cfg.services))


def create_user(state: InstallState) -> None:
    cfg = state.config
    root = cfg.target_root

    argv = ["useradd", "-m"]
    if cfg.user_groups:
        argv += ["-G", ",".join(cfg.user_groups)]
    chroot_cmd(root, [*argv, cfg.username], dry_run=cfg.dry_run)

    print(f"Set password for {cfg.username}:")
    chroot_cmd(root, ["passwd", cfg.username], interactive=True, dry_run=cfg.dry_run)

    append_file(root, "/etc/sudoers", cfg.sudoers_line + "\n", dry_run=cfg.dry_run)
    state.decide("user", cfg.username)


def set_root_password(state: InstallState) -> None:
    cfg = state.config
    print("Set root password:")
    chroot_cmd(cfg.target_root, ["passwd"], interactive=True, dry_run=cfg.dry_run)


CONFIGURE_ACTIONS: Sequence[Tuple[str, Action]] = (
    ("timezone", set_timezone),
    ("locale", configure_locale),
    ("console", configure_console),
    ("network_identity", configure_network_identity),
    ("initramfs", configure_initramfs),
    ("bootloader", configure_bootloader),
    ("services", enable_services),
    ("user", create_user),
    ("root_password", set_root_password),
)
