"""
This module contains the exceptions raised by the lockvendor installer.
"""


class LockvendorException(Exception):
    """
    Base exception for all lockvendor errors.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LockfileError(LockvendorException):
    """Raised when a lockfile cannot be read or does not match the lock schema."""

    pass


class MissingSourceError(LockvendorException):
    """Raised when a package has no distribution url."""

    def __init__(self, package_name: str):
        super().__init__("invalid distribution source")
        self.package_name = package_name


class UnsupportedTypeError(LockvendorException):
    """Raised when a package's distribution type is not the recognized archive type."""

    def __init__(self, package_name: str, dist_type: str):
        super().__init__("unsupported source type")
        self.package_name = package_name
        self.dist_type = dist_type


class UnexpectedStatusError(LockvendorException):
    """Raised when an archive download answers with anything but HTTP 200."""

    def __init__(self, url: str, status_code: int):
        super().__init__(f"should see 200, got {status_code} from {url}")
        self.url = url
        self.status_code = status_code


class CorruptArchiveError(LockvendorException):
    """Raised when a downloaded file cannot be opened as an archive."""

    def __init__(self, archive_path: str, reason: str):
        super().__init__(f"cannot open archive {archive_path}: {reason}")
        self.archive_path = archive_path


class UnsafeArchiveEntryError(LockvendorException):
    """Raised in strict mode when an archive entry would land outside its destination."""

    def __init__(self, entry_name: str, dest_dir: str):
        super().__init__(f"archive entry {entry_name!r} escapes {dest_dir}")
        self.entry_name = entry_name
        self.dest_dir = dest_dir


class InstallStageError(LockvendorException):
    """
    Wraps a failure from one step of a package install with a short stage label.

    The underlying exception stays reachable through ``cause`` and ``__cause__``.
    """

    def __init__(self, stage: str, cause: BaseException):
        super().__init__(f"{stage}: {cause}")
        self.stage = stage
        self.cause = cause
