"""
Install planning.

This package handles:
1. Deriving the temporary archive path for each package
2. Deriving the final install directory for each package
3. Tracking the status of each package's install sequence
"""

from .config_manager import InstallPlan, InstallPlanner, InstallStatus, summarize

__all__ = ["InstallPlan", "InstallPlanner", "InstallStatus", "summarize"]
