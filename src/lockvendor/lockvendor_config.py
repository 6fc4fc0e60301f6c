"""
Configuration parameters for lockvendor.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional

from lockvendor.lockvendor_exceptions import LockvendorException


class ArchiveType(str, Enum):
    """
    Possible distribution types that the installer can unpack.
    """

    ZIP = "zip"

    def __str__(self) -> str:
        return self.value

    @property
    def extension(self) -> str:
        return self.value


@dataclass
class LockvendorConfig:
    """
    Configuration parameters for an install run.
    """

    lockfile: str = "composer.lock"
    install_root: str = "vendor"
    archive_type: ArchiveType = ArchiveType.ZIP
    strict_paths: bool = False
    include_dev: bool = False
    max_workers: Optional[int] = None
    request_timeout: Optional[float] = None

    def __post_init__(self) -> None:
        if self.max_workers is not None and self.max_workers < 1:
            raise LockvendorException(f"'max_workers' must be positive, got {self.max_workers}")

    @classmethod
    def from_dict(cls, env: Dict[str, Any]) -> "LockvendorConfig":
        """
        Create a LockvendorConfig instance from a dictionary.

        Raises:
            LockvendorException: If the archive type or worker count is invalid
        """
        defaults = cls()

        archive_type_str = env.get("archive_type", defaults.archive_type.value)
        try:
            archive_type = ArchiveType(str(archive_type_str).lower())
        except ValueError:
            raise LockvendorException(f"Unsupported archive type: {archive_type_str}")

        max_workers = env.get("max_workers")
        request_timeout = env.get("request_timeout")

        return cls(
            lockfile=str(env.get("lockfile", defaults.lockfile)),
            install_root=str(env.get("install_root", defaults.install_root)),
            archive_type=archive_type,
            strict_paths=bool(env.get("strict_paths", defaults.strict_paths)),
            include_dev=bool(env.get("include_dev", defaults.include_dev)),
            max_workers=int(max_workers) if max_workers is not None else None,
            request_timeout=float(request_timeout) if request_timeout is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the config to a plain dictionary."""
        out = asdict(self)
        out["archive_type"] = self.archive_type.value
        return out
