import pytest

from archcrypt_installer.config import InstallConfig
from archcrypt_installer.errors import InstallError
from archcrypt_installer.main import build_steps
from archcrypt_installer.pipeline import run_pipeline
from archcrypt_installer.state import InstallState


class Recorder:
    def __init__(self, step_id, log, fail=False):
        self.step_id = step_id
        self.log = log
        self.fail = fail

    def run(self, state):
        self.log.append(self.step_id)
        if self.fail:
            raise RuntimeError("boom")
        return state


def test_runs_in_order():
    log = []
    steps = [Recorder("10_a", log), Recorder("20_b", log), Recorder("30_c", log)]
    result = run_pipeline(state=InstallState(config=InstallConfig()), steps=steps)
    assert log == ["10_a", "20_b", "30_c"]
    assert result.ran_steps == log
    assert result.state.current_step is None


def test_stop_after():
    log = []
    steps = [Recorder("10_a", log), Recorder("20_b", log), Recorder("30_c", log)]
    result = run_pipeline(state=InstallState(config=InstallConfig()), steps=steps, stop_after="20_b")
    assert result.ran_steps == ["10_a", "20_b"]


def test_unknown_stop_after_rejected_before_running():
    log = []
    with pytest.raises(InstallError):
        run_pipeline(state=InstallState(config=InstallConfig()), steps=[Recorder("10_a", log)], stop_after="99_x")
    assert log == []


def test_first_failure_aborts():
    log = []
    state = InstallState(config=InstallConfig())
    steps = [Recorder("10_a", log), Recorder("20_b", log, fail=True), Recorder("30_c", log)]
    with pytest.raises(RuntimeError):
        run_pipeline(state=state, steps=steps)
    assert log == ["10_a", "20_b"]
    assert state.current_step == "20_b"


def test_build_steps_order():
    assert [s.step_id for s in build_steps()] == [
        "10_select_disk",
        "20_partition_disk",
        "30_setup_encryption",
        "40_setup_lvm",
        "50_format_fs",
        "60_mount_fs",
        "70_install_base",
        "80_configure_system",
        "90_finalize",
    ]
