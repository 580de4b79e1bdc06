from .step_10_select_disk import SelectDiskStep
from .step_20_partition_disk import PartitionDiskStep
from .step_30_setup_encryption import SetupEncryptionStep
from .step_40_setup_lvm import SetupLvmStep
from .step_50_format_fs import FormatFilesystemsStep
from .step_60_mount_fs import MountFilesystemsStep
from .step_70_install_base import InstallBaseStep
from .step_80_configure_system import ConfigureSystemStep
from .step_90_finalize import FinalizeStep

__all__ = [
    "SelectDiskStep",
    "PartitionDiskStep",
    "SetupEncryptionStep",
    "SetupLvmStep",
    "FormatFilesystemsStep",
    "MountFilesystemsStep",
    "InstallBaseStep",
    "ConfigureSystemStep",
    "FinalizeStep",
]
