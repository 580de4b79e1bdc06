import subprocess
from typing import Dict, List, Sequence, Tuple

import pytest

from archcrypt_installer.config import InstallConfig
from archcrypt_installer.lib import command
from archcrypt_installer.state import InstallState


class FakeRunner:
    """Stands in for subprocess.run; records argv and replays canned output."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.interactive: List[List[str]] = []
        self.kwargs: List[dict] = []
        self._replies: Dict[Tuple[str, ...], Tuple[int, str]] = {}

    def reply(self, prefix: Sequence[str], stdout: str = "", returncode: int = 0) -> None:
        self._replies[tuple(prefix)] = (returncode, stdout)

    def __call__(self, argv, **kwargs):
        argv = list(argv)
        self.calls.append(argv)
        self.kwargs.append(kwargs)
        if "stdout" not in kwargs:
            self.interactive.append(argv)

        returncode, stdout = 0, ""
        best = -1
        for prefix, reply in self._replies.items():
            if tuple(argv[: len(prefix)]) == prefix and len(prefix) > best:
                best = len(prefix)
                returncode, stdout = reply
        return subprocess.CompletedProcess(argv, returncode, stdout=stdout, stderr="")

    def tools(self) -> List[str]:
        return [c[0] for c in self.calls]

    def chrooted(self) -> List[List[str]]:
        return [c[2:] for c in self.calls if c[0] == "arch-chroot"]


@pytest.fixture
def runner(monkeypatch):
    fake = FakeRunner()
    monkeypatch.setattr(command.subprocess, "run", fake)
    return fake


@pytest.fixture
def target_root(tmp_path):
    root = tmp_path / "mnt"
    (root / "etc").mkdir(parents=True)
    (root / "boot").mkdir()
    (root / "root").mkdir()
    return root


@pytest.fixture
def state(target_root):
    cfg = InstallConfig(target_root=str(target_root), disk="/dev/sda", confirm_destroy=False)
    return InstallState(config=cfg, disk="/dev/sda", boot_part="/dev/sda1", lvm_part="/dev/sda2")
