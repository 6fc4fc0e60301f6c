"""
Lockfile models.

This package provides Pydantic data models for the resolved manifest that
the installer consumes: the lock, its packages and their distributions.
"""

from .lock import (
    Distribution,
    Lock,
    Package,
)

__all__ = [
    "Distribution",
    "Lock",
    "Package",
]
