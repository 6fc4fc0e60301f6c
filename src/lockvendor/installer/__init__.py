"""
Lock installer.

This package handles:
1. Downloading distribution archives
2. Extracting archives into the install root
3. Running one install task per package and aggregating the outcomes
"""

from .extractor import ArchiveExtractor
from .fetcher import ArchiveFetcher
from .installer import InstallResult, LockInstaller, install
from .task_group import InstallTaskGroup, TaskOutcome

__all__ = [
    "ArchiveExtractor",
    "ArchiveFetcher",
    "InstallResult",
    "InstallTaskGroup",
    "LockInstaller",
    "TaskOutcome",
    "install",
]
