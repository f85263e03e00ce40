"""Package-manager-agnostic lockfile interface and its pnpm implementation.

Build tooling only talks to the ``Lockfile`` protocol. Implementations are
registered in ``LOCKFILE_FORMATS`` by lockfile filename and picked once when
the file is loaded.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol, TypeAlias

from .decoder import decode
from .encoder import encode
from .errors import UnknownLockfileFormat
from .models import LockfileModel
from .pruner import prune
from .resolver import ResolvedPackage, resolve_package, resolve_specifier


class Lockfile(Protocol):
    """Operations every lockfile implementation provides."""

    def encode(self) -> bytes: ...

    def resolve_specifier(
        self, workspace_path: str, name: str, specifier: str
    ) -> tuple[str, bool]: ...

    def subgraph(
        self, workspace_paths: Iterable[str], packages: Iterable[str]
    ) -> Lockfile: ...


@dataclass(slots=True, frozen=True)
class PnpmLockfile:
    """``Lockfile`` implementation backed by a decoded pnpm-lock.yaml."""

    model: LockfileModel

    @classmethod
    def decode(cls, content: bytes | str) -> PnpmLockfile:
        return cls(model=decode(content))

    def encode(self) -> bytes:
        return encode(self.model)

    def resolve_specifier(
        self, workspace_path: str, name: str, specifier: str
    ) -> tuple[str, bool]:
        return resolve_specifier(self.model, workspace_path, name, specifier)

    def resolve_package(self, workspace_path: str, name: str, specifier: str) -> ResolvedPackage:
        return resolve_package(self.model, workspace_path, name, specifier)

    def subgraph(self, workspace_paths: Iterable[str], packages: Iterable[str]) -> PnpmLockfile:
        return PnpmLockfile(model=prune(self.model, workspace_paths, packages))


DecodeFunction: TypeAlias = Callable[[bytes], Lockfile]


@dataclass(slots=True, frozen=True)
class LockfileFormat:
    """Binding of a lockfile filename to the implementation that reads it."""

    filename: str
    display_name: str
    decode: DecodeFunction


LOCKFILE_FORMATS: dict[str, LockfileFormat] = {
    "pnpm-lock.yaml": LockfileFormat(
        filename="pnpm-lock.yaml",
        display_name="pnpm",
        decode=PnpmLockfile.decode,
    ),
}


def get_lockfile_format(filename: str) -> LockfileFormat:
    """Return the format registered for ``filename``, or raise UnknownLockfileFormat."""
    lockfile_format = LOCKFILE_FORMATS.get(filename)
    if lockfile_format is None:
        known = ", ".join(sorted(LOCKFILE_FORMATS))
        raise UnknownLockfileFormat(f"Unknown lockfile '{filename}'. Known lockfiles: {known}")
    return lockfile_format


def load_lockfile(content: bytes, filename: str = "pnpm-lock.yaml") -> Lockfile:
    """Decode ``content`` with the implementation registered for ``filename``."""
    return get_lockfile_format(filename).decode(content)
