"""
Pydantic data models for composer.lock style lockfiles.

A lockfile lists fully resolved packages, each bound to one downloadable
distribution archive. The models are read-only once loaded; every install
task reads them concurrently.
"""

import json
import pathlib
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from lockvendor.lockvendor_exceptions import LockfileError


class Distribution(BaseModel):
    """
    Where a package's contents come from: an archive type and a source url.

    Empty values are accepted here; the installer rejects them before any I/O.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    type: str = Field("", description="Archive type, only 'zip' is installable")
    url: str = Field("", description="URL to download the archive from")
    reference: Optional[str] = Field(None, description="Source reference, informational")
    shasum: Optional[str] = Field(None, description="Archive checksum, never verified")

    @field_validator("type", "url", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class Package(BaseModel):
    """A single locked dependency."""

    model_config = ConfigDict(extra="allow", frozen=True)

    name: str = Field(..., min_length=1, description="Package name, e.g. vendor/name")
    version: str = Field("", description="Locked version, informational only")
    dist: Distribution = Field(default_factory=Distribution)

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_str(cls, value: Any) -> Any:
        return "" if value is None else value


class Lock(BaseModel):
    """
    Root of a lockfile.

    Structure:
    {
      "packages": [
        {"name": "vendor/name", "version": "1.0.0", "dist": {"type": "zip", "url": "..."}},
        ...
      ],
      "packages-dev": [...]
    }
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    packages: List[Package] = Field(default_factory=list)
    packages_dev: List[Package] = Field(default_factory=list, alias="packages-dev")

    @field_validator("packages", "packages_dev", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def all_packages(self, include_dev: bool = False) -> List[Package]:
        """
        Packages to install, runtime packages first.

        Args:
            include_dev: Also return the ``packages-dev`` section

        Returns:
            List of Package objects
        """
        if include_dev:
            return [*self.packages, *self.packages_dev]
        return list(self.packages)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Lock":
        """
        Build a Lock from an already decoded lockfile.

        Raises:
            LockfileError: If the data does not match the lockfile schema
        """
        if not isinstance(data, dict):
            raise LockfileError(f"lockfile root must be an object, got {type(data).__name__}")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise LockfileError(f"invalid lockfile: {e}") from e

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "Lock":
        """
        Parse lockfile JSON text.

        Raises:
            LockfileError: If the text is not valid JSON, or bytes are not valid UTF-8
        """
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise LockfileError(f"lockfile is not valid JSON: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Union[str, pathlib.Path]) -> "Lock":
        """
        Load a lockfile from disk.

        Raises:
            LockfileError: If the file cannot be read or parsed
        """
        try:
            raw = pathlib.Path(path).read_bytes()
        except OSError as e:
            raise LockfileError(f"cannot read lockfile {path}: {e}") from e
        return cls.from_json(raw)
