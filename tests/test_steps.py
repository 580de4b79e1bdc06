import dataclasses

import pytest

from archcrypt_installer.config import InstallConfig
from archcrypt_installer.errors import InstallError
from archcrypt_installer.state import InstallState
from archcrypt_installer.steps import (
    ConfigureSystemStep,
    FinalizeStep,
    FormatFilesystemsStep,
    InstallBaseStep,
    MountFilesystemsStep,
    PartitionDiskStep,
    SelectDiskStep,
    SetupEncryptionStep,
    SetupLvmStep,
)
from archcrypt_installer.steps import step_10_select_disk


def _answers(monkeypatch, *answers):
    it = iter(answers)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(it))


def test_select_disk_rejects_regular_file(runner, monkeypatch, tmp_path):
    image = tmp_path / "disk.img"
    image.write_bytes(b"\0" * 512)
    _answers(monkeypatch, str(image))

    state = InstallState(config=InstallConfig())
    with pytest.raises(InstallError, match="not a valid block device"):
        SelectDiskStep().run(state)

    assert runner.tools() == ["lsblk"]
    assert state.disk is None


def test_select_disk_prompts_and_confirms(runner, monkeypatch):
    monkeypatch.setattr(step_10_select_disk, "is_block_device", lambda path: True)
    _answers(monkeypatch, "/dev/nvme0n1", "/dev/nvme0n1")

    state = SelectDiskStep().run(InstallState(config=InstallConfig()))

    assert state.disk == "/dev/nvme0n1"
    assert state.boot_part == "/dev/nvme0n1p1"
    assert state.lvm_part == "/dev/nvme0n1p2"


def test_select_disk_confirmation_mismatch_aborts(runner, monkeypatch):
    monkeypatch.setattr(step_10_select_disk, "is_block_device", lambda path: True)
    _answers(monkeypatch, "no")

    with pytest.raises(InstallError):
        SelectDiskStep().run(InstallState(config=InstallConfig(disk="/dev/sda")))
    assert runner.calls == []


def test_select_disk_from_config_without_prompt(runner, monkeypatch):
    monkeypatch.setattr(step_10_select_disk, "is_block_device", lambda path: True)
    monkeypatch.setattr("builtins.input", lambda prompt="": pytest.fail("prompted"))

    state = SelectDiskStep().run(InstallState(config=InstallConfig(disk="/dev/sdb", confirm_destroy=False)))
    assert state.lvm_part == "/dev/sdb2"


def test_partition_requires_disk():
    with pytest.raises(InstallError, match="10_select_disk"):
        PartitionDiskStep().run(InstallState(config=InstallConfig()))


def test_disk_steps_in_order(runner, state):
    for step in (PartitionDiskStep(), SetupEncryptionStep(), SetupLvmStep(), FormatFilesystemsStep()):
        state = step.run(state)

    assert runner.tools() == [
        "parted", "parted", "parted", "parted", "parted", "parted",
        "cryptsetup", "cryptsetup",
        "pvcreate", "vgcreate", "lvcreate", "lvs",
        "mkfs.fat", "mkfs.ext4", "lvreduce",
    ]
    assert ["cryptsetup", "open", "/dev/sda2", "reich"] in runner.calls
    assert ["lvreduce", "-L", "-256M", "--resizefs", "/dev/land/root", "-y"] in runner.calls


def test_mount_step(runner, state, target_root):
    MountFilesystemsStep().run(state)
    assert runner.calls[:3] == [
        ["mount", "/dev/land/root", str(target_root)],
        ["mkdir", "-p", f"{target_root}/boot"],
        ["mount", "/dev/sda1", f"{target_root}/boot"],
    ]
    assert runner.calls[3] == ["lsblk"]


@pytest.mark.parametrize(
    "vendor,package",
    [("GenuineIntel", "intel-ucode"), ("AuthenticAMD", "amd-ucode"), ("HygonGenuine", None)],
)
def test_install_base_microcode(runner, state, target_root, vendor, package):
    runner.reply(["lscpu"], stdout=f"Vendor ID:   {vendor}\n")
    runner.reply(["blkid"], stdout="luks-uuid\n")
    runner.reply(["genfstab"], stdout="UUID=x / ext4 rw 0 1\n")

    state = InstallBaseStep().run(state)

    assert runner.calls[0] == ["pacstrap", str(target_root), "base", "base-devel", "linux", "linux-firmware", "lvm2", "iwd"]
    pacman = [c for c in runner.chrooted() if c[0] == "pacman"]
    if package:
        assert pacman == [["pacman", "-S", "--noconfirm", package]]
    else:
        assert pacman == []
    assert state.microcode == package
    assert state.luks_uuid == "luks-uuid"
    assert (target_root / "root/luks_uuid").read_text() == "luks-uuid\n"
    assert (target_root / "etc/fstab").read_text() == "UUID=x / ext4 rw 0 1\n"


def test_finalize_prints_instructions(capsys, state, target_root):
    FinalizeStep().run(state)
    out = capsys.readouterr().out
    assert f"umount -R {target_root}" in out
    assert "reboot" in out


def test_configure_system_runs_actions_in_order(state):
    seen = []
    step = ConfigureSystemStep(actions=[("a", lambda s: seen.append("a")), ("b", lambda s: seen.append("b"))])
    step.run(state)
    assert seen == ["a", "b"]


def test_dry_run_steps_do_not_execute(runner, state):
    state.config = dataclasses.replace(state.config, dry_run=True)
    for step in (PartitionDiskStep(), SetupEncryptionStep(), SetupLvmStep(), FormatFilesystemsStep()):
        step.run(state)
    assert runner.calls == []
