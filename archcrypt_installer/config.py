from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import InstallError
from .lib.env import PATHS

DEFAULT_PACKAGES = ("base", "base-devel", "linux", "linux-firmware", "lvm2", "iwd")

DEFAULT_HOOKS = (
    "base",
    "systemd",
    "keyboard",
    "autodetect",
    "microcode",
    "modconf",
    "kms",
    "sd-vconsole",
    "block",
    "sd-encrypt",
    "lvm2",
    "filesystems",
    "fsck",
)

DEFAULT_SERVICES = (
    "systemd-networkd.service",
    "systemd-resolved.service",
    "iwd.service",
)

_LIST_FIELDS = {"packages", "initramfs_hooks", "services", "user_groups"}
_BOOL_FIELDS = {"confirm_destroy", "dry_run"}
_OPTIONAL_FIELDS = {"disk"}
_REQUIRED_LISTS = {"packages", "initramfs_hooks"}


@dataclass(frozen=True)
class InstallConfig:
    hostname: str = "chernobyl"
    username: str = "plutonium"
    timezone: str = "Asia/Kolkata"
    locale: str = "en_US.UTF-8"
    locale_charset: str = "UTF-8"
    keymap: str = "us"
    efi_size: str = "1G"
    crypt_device_name: str = "reich"
    vg_name: str = "land"
    lv_name: str = "root"
    root_reserve: str = "256M"
    packages: Tuple[str, ...] = DEFAULT_PACKAGES
    console_font: str = "latarcyrheb-sun32"
    fallback_font: str = "ter-132n"
    fallback_font_package: str = "terminus-font"
    initramfs_hooks: Tuple[str, ...] = DEFAULT_HOOKS
    services: Tuple[str, ...] = DEFAULT_SERVICES
    user_groups: Tuple[str, ...] = ("wheel",)
    sudoers_line: str = "%wheel ALL=(ALL) ALL"
    loader_timeout: int = 3
    target_root: str = PATHS.target_root
    disk: Optional[str] = None
    confirm_destroy: bool = True
    dry_run: bool = False

    @property
    def mapper_path(self) -> str:
        return f"/dev/mapper/{self.crypt_device_name}"

    @property
    def root_lv_path(self) -> str:
        return f"/dev/{self.vg_name}/{self.lv_name}"

    @property
    def locale_gen_entry(self) -> str:
        return f"{self.locale} {self.locale_charset}"

    def with_overrides(self, **overrides: Any) -> "InstallConfig":
        """Return a copy with the non-None overrides applied."""
        return dataclasses.replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _coerce(name: str, value: Any) -> Any:
    if value is None:
        if name in _OPTIONAL_FIELDS:
            return None
        raise InstallError(f"config.{name} must not be empty")
    if name in _LIST_FIELDS:
        if isinstance(value, str):
            items = tuple(value.split())
        elif isinstance(value, (list, tuple)):
            items = tuple(str(v) for v in value)
        else:
            raise InstallError(f"config.{name} must be a list or a whitespace-separated string")
        if not items and name in _REQUIRED_LISTS:
            raise InstallError(f"config.{name} must not be empty")
        return items
    if name in _BOOL_FIELDS:
        # YAML true/false only; quoted "false" would otherwise read as True
        if not isinstance(value, bool):
            raise InstallError(f"config.{name} must be true or false, got {value!r}")
        return value
    if name == "loader_timeout":
        if isinstance(value, bool):
            raise InstallError(f"config.{name} must be an integer, got {value!r}")
        try:
            timeout = int(value)
        except (TypeError, ValueError) as e:
            raise InstallError(f"config.{name} must be an integer, got {value!r}") from e
        if timeout < 0:
            raise InstallError(f"config.{name} must not be negative")
        return timeout
    text = str(value).strip()
    if not text:
        raise InstallError(f"config.{name} must not be empty")
    return text


def config_from_mapping(raw: Dict[str, Any]) -> InstallConfig:
    known = {f.name for f in dataclasses.fields(InstallConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise InstallError(f"Unknown config keys: {', '.join(unknown)}")
    return InstallConfig(**{k: _coerce(k, v) for k, v in raw.items()})


def load_install_config(path: Optional[str]) -> InstallConfig:
    if not path:
        return InstallConfig()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise InstallError("install config must be YAML")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise InstallError(f"Invalid YAML in {p}: {e}") from e
    if not isinstance(raw, dict):
        raise InstallError(f"{p.name} must contain a mapping/object")

    return config_from_mapping(raw)
