"""
Lock installer implementation.

Installs every package of a lock concurrently: validate, download the
archive, extract it, then delete the temporary archive.
"""

import logging
import os
from typing import Dict, List, Optional, Tuple

import requests

from lockvendor.install_config import InstallPlan, InstallPlanner, InstallStatus, summarize
from lockvendor.installer.extractor import ArchiveExtractor
from lockvendor.installer.fetcher import ArchiveFetcher
from lockvendor.installer.task_group import InstallTaskGroup, TaskOutcome
from lockvendor.lock_models import Lock, Package
from lockvendor.lockvendor_config import LockvendorConfig
from lockvendor.lockvendor_exceptions import (
    InstallStageError,
    MissingSourceError,
    UnsupportedTypeError,
)
from lockvendor.lockvendor_logger import LockvendorLogger


class InstallResult:
    """
    Aggregate outcome of an install run.

    ``error`` is the failure that completed first; ``errors`` holds every
    failure for callers that need per-package diagnostics.
    """

    def __init__(self, plans: List[InstallPlan], outcomes: List[TaskOutcome]):
        self.plans = plans
        self.outcomes = outcomes

    @property
    def ok(self) -> bool:
        return all(outcome.ok for outcome in self.outcomes)

    @property
    def errors(self) -> List[Tuple[str, BaseException]]:
        return [(outcome.key, outcome.error) for outcome in self.outcomes if outcome.error is not None]

    @property
    def error(self) -> Optional[BaseException]:
        errors = self.errors
        return errors[0][1] if errors else None

    def raise_for_errors(self) -> None:
        """Raise the first-completed failure, if any task failed."""
        error = self.error
        if error is not None:
            raise error

    def summary(self) -> Dict[str, int]:
        return summarize(self.plans)

    def __repr__(self) -> str:
        return f"InstallResult(ok={self.ok}, failed={len(self.errors)}, total={len(self.outcomes)})"


class LockInstaller:
    """
    Installs the packages of a lock below the configured install root.

    Each package gets its own task; tasks share no in-memory state and a
    failing task does not stop the others.
    """

    def __init__(
        self,
        config: LockvendorConfig,
        logger: LockvendorLogger,
        fetcher: Optional[ArchiveFetcher] = None,
        extractor: Optional[ArchiveExtractor] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the installer.

        Args:
            config: Install configuration
            logger: Logger for structured install events
            fetcher: Archive fetcher, built from ``session`` if omitted
            extractor: Archive extractor, built from ``config.strict_paths`` if omitted
            session: HTTP session for the default fetcher
        """
        self.config = config
        self.logger = logger
        self.planner = InstallPlanner(config)
        self.fetcher = fetcher or ArchiveFetcher(logger, session=session, timeout=config.request_timeout)
        self.extractor = extractor or ArchiveExtractor(strict_paths=config.strict_paths)

    def install(self, lock: Lock) -> InstallResult:
        """
        Install every package of the lock and wait for all of them.

        Returns:
            InstallResult describing every package's outcome
        """
        plans = self.planner.create_install_plans(lock)

        if not plans:
            self.logger.log("No packages to install", logging.INFO)
            return InstallResult(plans, [])

        self.logger.log(
            f"Starting install of {len(plans)} packages",
            logging.INFO,
            **{"install_root": self.config.install_root},
        )

        group = InstallTaskGroup(max_workers=self.config.max_workers)
        for plan in plans:
            self.logger.log(
                f"Planned {plan.name}",
                logging.DEBUG,
                **{"name": plan.name, "archive": plan.archive_path, "destination": plan.destination_path},
            )
            group.go(plan.name, lambda plan=plan: self.install_plan(plan))

        return InstallResult(plans, group.wait())

    def install_package(self, package: Package) -> InstallPlan:
        """Install a single package synchronously."""
        plan = self.planner.plan_for(package)
        self.install_plan(plan)
        return plan

    def install_plan(self, plan: InstallPlan) -> None:
        """
        Run the install sequence for one plan and record its status.

        Raises:
            LockvendorException: On validation failures or wrapped step failures
        """
        plan.status = InstallStatus.IN_PROGRESS
        try:
            self._run(plan)
        except Exception as e:
            plan.mark_completed(e)
            self.logger.log(
                f"Failed to install {plan.name}: {e}",
                logging.ERROR,
                **{"name": plan.name, "version": plan.package.version},
            )
            raise

        plan.mark_completed()
        self.logger.log(
            f"Installed {plan.name} to {plan.destination_path}",
            logging.INFO,
            **{"name": plan.name, "version": plan.package.version},
        )

    def validate(self, package: Package) -> None:
        """
        Reject packages that cannot be installed, before any I/O.

        Raises:
            MissingSourceError: If the distribution has no url
            UnsupportedTypeError: If the distribution type is not the recognized one
        """
        if not package.dist.url:
            self.logger.log(
                "invalid distribution source",
                logging.ERROR,
                **{"name": package.name},
            )
            raise MissingSourceError(package.name)

        if package.dist.type != self.config.archive_type.value:
            self.logger.log(
                "unsupported source type",
                logging.ERROR,
                **{"name": package.name, "dist.type": package.dist.type},
            )
            raise UnsupportedTypeError(package.name, package.dist.type)

    def _run(self, plan: InstallPlan) -> None:
        self.validate(plan.package)

        try:
            self.fetcher.fetch(plan.package, plan.archive_path)
        except Exception as e:
            raise InstallStageError("download archive", e) from e

        try:
            self.extractor.extract(plan.archive_path, plan.destination_path)
        except Exception as e:
            raise InstallStageError(f"unzip {plan.archive_path}", e) from e

        try:
            os.remove(plan.archive_path)
        except OSError as e:
            raise InstallStageError("clean up", e) from e
        self.logger.log(
            "Removed temporary archive",
            logging.DEBUG,
            **{"name": plan.name, "archive": plan.archive_path},
        )


def install(
    lock: Lock,
    config: Optional[LockvendorConfig] = None,
    logger: Optional[LockvendorLogger] = None,
    session: Optional[requests.Session] = None,
) -> None:
    """
    Install a lock, raising the first-completed failure if any package failed.
    """
    installer = LockInstaller(config or LockvendorConfig(), logger or LockvendorLogger(), session=session)
    installer.install(lock).raise_for_errors()
