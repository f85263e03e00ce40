"""Error taxonomy for decoding, resolving and pruning pnpm lockfiles."""

from __future__ import annotations


class LockfileError(RuntimeError):
    """Base error for every failure raised by this package."""


class DecodeError(LockfileError):
    """Raised when lockfile content cannot be turned into a model.

    A decode failure is fatal for the whole document; nothing is recovered
    partially.
    """


class MalformedDocument(DecodeError):
    """Raised when the document is not a YAML mapping of the expected shape."""


class UnsupportedSchema(DecodeError):
    """Raised when ``lockfileVersion`` is missing or names an unknown family."""

    def __init__(self, lockfile_version: object) -> None:
        self.lockfile_version = lockfile_version
        if lockfile_version is None:
            message = "lockfile has no 'lockfileVersion' field"
        else:
            message = f"unsupported lockfileVersion '{lockfile_version}'"
        super().__init__(message)


class MalformedImporter(DecodeError):
    """Raised when an importer dependency lacks its specifier or version."""

    def __init__(self, workspace: str, package: str, reason: str) -> None:
        self.workspace = workspace
        self.package = package
        super().__init__(f"importer '{workspace}': dependency '{package}' {reason}")


class MalformedLocator(DecodeError):
    """Raised when a package key cannot be split into name and version."""

    def __init__(self, key: str, reason: str = "cannot separate name and version") -> None:
        self.key = key
        super().__init__(f"malformed package key '{key}': {reason}")


class EncodeError(LockfileError):
    """Raised when a model violates an internal invariant during encoding."""


class ResolutionError(LockfileError):
    """Base error for specifier resolution."""


class PruneError(LockfileError):
    """Base error for subgraph pruning."""


class UnknownWorkspace(ResolutionError, PruneError):
    """Raised when a workspace path has no importer entry in the lockfile."""

    def __init__(self, workspace: str) -> None:
        self.workspace = workspace
        super().__init__(f"no workspace '{workspace}' found in lockfile")


class UnknownLockfileFormat(LockfileError):
    """Raised when no lockfile implementation is registered for a filename."""


class ConfigError(LockfileError):
    """Raised when the configuration file cannot be loaded or is invalid."""
