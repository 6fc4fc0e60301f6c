"""
lockvendor installs the packages of a resolved composer.lock style lockfile
into a local vendor directory.
"""

from lockvendor.installer import InstallResult, LockInstaller, install
from lockvendor.lock_models import Distribution, Lock, Package
from lockvendor.lockvendor_config import ArchiveType, LockvendorConfig
from lockvendor.lockvendor_logger import LockvendorLogger

__all__ = [
    "ArchiveType",
    "Distribution",
    "InstallResult",
    "Lock",
    "LockInstaller",
    "LockvendorConfig",
    "LockvendorLogger",
    "Package",
    "install",
]
