"""
Install planning.

Derives, for every locked package, where its archive is downloaded to and
where its contents are laid out, and tracks the status of each package's
install sequence.
"""

import pathlib
from typing import Dict, List, Optional

from lockvendor.lock_models import Lock, Package
from lockvendor.lockvendor_config import LockvendorConfig


class InstallStatus:
    """Enumeration of install statuses."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class InstallPlan:
    """
    A plan to install a single package.

    Captures everything one install task needs. A plan is only ever
    touched by the task that executes it.
    """

    def __init__(
            self,
            package: Package,
            archive_path: pathlib.Path,
            destination_path: pathlib.Path,
            status: str = InstallStatus.PENDING,
    ):
        """
        Initialize an install plan.

        Args:
            package: The locked package
            archive_path: Temporary file the archive is downloaded to
            destination_path: Directory the archive is extracted into
            status: Current install status
        """
        self.package = package
        self.archive_path = archive_path
        self.destination_path = destination_path
        self.status = status
        self.error_message: Optional[str] = None

    @property
    def name(self) -> str:
        return self.package.name

    def mark_completed(self, error: Optional[BaseException] = None) -> None:
        """Record the outcome of the install sequence."""
        if error is None:
            self.status = InstallStatus.COMPLETED
            self.error_message = None
        else:
            self.status = InstallStatus.FAILED
            self.error_message = str(error)

    def __repr__(self) -> str:
        return (
            f"InstallPlan(name={self.name}, "
            f"status={self.status}, archive={self.archive_path})"
        )


class InstallPlanner:
    """
    Turns a Lock into install plans rooted under the configured install root.
    """

    def __init__(self, config: LockvendorConfig):
        """
        Initialize the planner.

        Args:
            config: Configuration with the install root and archive type
        """
        self.config = config
        self.install_root = pathlib.Path(config.install_root)

    def archive_path_for(self, package: Package) -> pathlib.Path:
        """
        Temporary archive location for a package.

        Only the first "/" of the name becomes "-", e.g. "acme/http" -> "acme-http.zip".
        """
        file_name = package.name.replace("/", "-", 1)
        return self.install_root / f"{file_name}.{self.config.archive_type.extension}"

    def destination_path_for(self, package: Package) -> pathlib.Path:
        """Final directory for a package, using the unmodified name."""
        return self.install_root / package.name

    def plan_for(self, package: Package) -> InstallPlan:
        """Create the install plan for one package."""
        return InstallPlan(
            package=package,
            archive_path=self.archive_path_for(package),
            destination_path=self.destination_path_for(package),
        )

    def create_install_plans(self, lock: Lock) -> List[InstallPlan]:
        """
        Create one plan per package of the lock.

        Returns:
            List of InstallPlan objects in lock order
        """
        packages = lock.all_packages(include_dev=self.config.include_dev)
        return [self.plan_for(package) for package in packages]


def summarize(plans: List[InstallPlan]) -> Dict[str, int]:
    """
    Get a summary of install results.

    Returns:
        Dictionary with counts of completed, failed and pending installs
    """
    completed = sum(1 for plan in plans if plan.status == InstallStatus.COMPLETED)
    failed = sum(1 for plan in plans if plan.status == InstallStatus.FAILED)
    pending = len(plans) - completed - failed

    return {
        "completed": completed,
        "failed": failed,
        "pending": pending,
        "total": len(plans),
    }
