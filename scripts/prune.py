#!/usr/bin/env python3
"""Local CLI entrypoint for pruning and querying pnpm lockfiles.

Usage:
  python scripts/prune.py prune --workspace apps/docs [--workspace ...]
      [--extra turbo] [--lockfile pnpm-lock.yaml] [--output out/pnpm-lock.yaml]
      [--summary]
  python scripts/prune.py resolve --workspace apps/web typescript ^4.5.3

Defaults come from pnpm-lockfile.json (or $PNPM_LOCKFILE_CONFIG) when present.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pnpm_lockfile.config import load_settings
from pnpm_lockfile.core import prune_lockfile, resolve_in_lockfile
from pnpm_lockfile.errors import ConfigError, LockfileError
from pnpm_lockfile.summary import render_summary

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, log_level: str | None = None) -> None:
    """Configure logging based on verbosity flags."""
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, (log_level or "WARNING").upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--config", type=Path, default=None, help="Path to settings JSON")
    parser.add_argument("--lockfile", type=Path, default=None, help="Lockfile to read")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    prune = commands.add_parser("prune", help="Write a lockfile restricted to some workspaces")
    prune.add_argument(
        "--workspace",
        dest="workspaces",
        action="append",
        required=True,
        help="Workspace path to keep (repeatable; '.' for the root)",
    )
    prune.add_argument(
        "--extra",
        dest="extra_packages",
        action="append",
        default=[],
        help="Package name to keep even if no workspace depends on it (repeatable)",
    )
    prune.add_argument("--output", type=Path, default=None, help="Where to write the result")
    prune.add_argument(
        "--summary", action="store_true", help="Print a Markdown summary instead of JSON"
    )

    resolve = commands.add_parser("resolve", help="Show the version pnpm recorded for a specifier")
    resolve.add_argument("--workspace", default=".", help="Workspace path ('.' for the root)")
    resolve.add_argument("package")
    resolve.add_argument("specifier")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    setup_logging(args.verbose, settings.log_level)
    lockfile_path = args.lockfile or settings.lockfile

    try:
        if args.command == "prune":
            extra_packages = [*settings.extra_packages, *args.extra_packages]
            report = prune_lockfile(
                lockfile_path,
                args.workspaces,
                extra_packages,
                output_path=args.output or settings.output,
            )
            if args.summary:
                print(render_summary(report), end="")
            else:
                print(json.dumps(report, indent=2))
            return 0

        result = resolve_in_lockfile(lockfile_path, args.workspace, args.package, args.specifier)
        print(json.dumps(result, indent=2))
        return 0 if result["found"] else 1
    except FileNotFoundError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2
    except LockfileError as exc:
        logger.error(f"{type(exc).__name__}: {exc}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
