"""pnpm-lockfile core package.

Decodes pnpm-lock.yaml into a typed model, resolves declared specifiers to
the versions pnpm recorded, and prunes a lockfile down to a subset of
workspaces. The core operations perform no I/O; ``core`` wraps them for use
on files.
"""

from .decoder import decode
from .encoder import encode
from .lockfile import Lockfile, PnpmLockfile, load_lockfile
from .pruner import prune
from .resolver import resolve_specifier

__all__ = [
    "Lockfile",
    "PnpmLockfile",
    "decode",
    "encode",
    "load_lockfile",
    "prune",
    "resolve_specifier",
]
