"""
Archive extractor.

Unpacks a zip distribution into a destination directory, replacing the
archive's single top-level directory with that destination.
"""

import os
import pathlib
import shutil
import zipfile
from typing import List, Union

from lockvendor.lockvendor_exceptions import CorruptArchiveError, UnsafeArchiveEntryError

DEFAULT_DIR_MODE = 0o755
DEFAULT_FILE_MODE = 0o644


class ArchiveExtractor:
    """
    Extracts zip archives entry by entry, in stored order.

    By default only the first path segment of each entry is rewritten; deeper
    ``..`` segments are not rejected. Pass ``strict_paths=True`` to refuse
    entries that would be written outside the destination.
    """

    def __init__(self, strict_paths: bool = False):
        self.strict_paths = strict_paths

    def extract(self, archive_path: Union[str, pathlib.Path], dest_dir: Union[str, pathlib.Path]) -> None:
        """
        Extract every entry of ``archive_path`` below ``dest_dir``.

        The first error aborts the extraction. Entries written before it stay
        on disk.

        Raises:
            CorruptArchiveError: If the file is not a readable zip archive
            UnsafeArchiveEntryError: In strict mode, for entries escaping dest_dir
            OSError: On filesystem failures, including a missing archive
        """
        try:
            archive = zipfile.ZipFile(archive_path)
        except zipfile.BadZipFile as e:
            raise CorruptArchiveError(str(archive_path), str(e)) from e

        with archive:
            os.makedirs(dest_dir, DEFAULT_DIR_MODE, exist_ok=True)

            for info in archive.infolist():
                self._extract_entry(archive, info, str(dest_dir))

    def target_path(self, entry_name: str, dest_dir: str) -> str:
        """
        Map an archive entry name to its location on disk.

        "wrapper/src/lib.php" extracted into "vendor/acme/http" becomes
        "vendor/acme/http/src/lib.php".
        """
        segments = entry_name.split("/")
        if self.strict_paths:
            self._check_entry(entry_name, segments[1:], dest_dir)
        segments[0] = dest_dir
        return os.path.normpath(os.path.join(*segments))

    def _check_entry(self, entry_name: str, rest: List[str], dest_dir: str) -> None:
        if entry_name.startswith("/") or "\\" in entry_name:
            raise UnsafeArchiveEntryError(entry_name, dest_dir)
        if any(segment == ".." for segment in rest):
            raise UnsafeArchiveEntryError(entry_name, dest_dir)

        base = os.path.realpath(dest_dir)
        target = os.path.realpath(os.path.join(dest_dir, *rest))
        if target != base and not target.startswith(base + os.sep):
            raise UnsafeArchiveEntryError(entry_name, dest_dir)

    def _extract_entry(self, archive: zipfile.ZipFile, info: zipfile.ZipInfo, dest_dir: str) -> None:
        path = self.target_path(info.filename, dest_dir)
        unix_mode = (info.external_attr >> 16) & 0o777

        if info.is_dir():
            os.makedirs(path, unix_mode or DEFAULT_DIR_MODE, exist_ok=True)
            return

        os.makedirs(os.path.dirname(path) or ".", DEFAULT_DIR_MODE, exist_ok=True)
        try:
            with archive.open(info) as src:
                fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, unix_mode or DEFAULT_FILE_MODE)
                with os.fdopen(fd, "wb") as out:
                    shutil.copyfileobj(src, out)
        except zipfile.BadZipFile as e:
            raise CorruptArchiveError(archive.filename or "", str(e)) from e
