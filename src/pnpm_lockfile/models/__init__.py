"""Data models for decoded pnpm lockfiles."""

from __future__ import annotations

from .importer import (
    DEPENDENCY_KINDS,
    ROOT_IMPORTER,
    DependencySpec,
    ImporterEntry,
    normalize_workspace_path,
)
from .locator import LOCAL, REGISTRY, REMOTE, PackageLocator
from .lockfile_model import LockfileModel
from .package_entry import ResolvedPackageEntry

__all__ = [
    "DEPENDENCY_KINDS",
    "LOCAL",
    "REGISTRY",
    "REMOTE",
    "ROOT_IMPORTER",
    "DependencySpec",
    "ImporterEntry",
    "LockfileModel",
    "PackageLocator",
    "ResolvedPackageEntry",
    "normalize_workspace_path",
]
