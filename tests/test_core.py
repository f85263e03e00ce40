"""Tests for the file-level entry points, the report and the summary."""

import shutil

import pytest

from pnpm_lockfile.core import prune_lockfile, read_lockfile, resolve_in_lockfile
from pnpm_lockfile.decoder import decode
from pnpm_lockfile.summary import render_summary


@pytest.fixture
def lockfile_path(testdata, tmp_path):
    path = tmp_path / "pnpm-lock.yaml"
    shutil.copyfile(testdata / "pnpm7-workspace.yaml", path)
    return path


def test_read_lockfile(lockfile_path) -> None:
    assert read_lockfile(lockfile_path).model.lockfile_version == "5.4"


def test_prune_lockfile_writes_output(lockfile_path, tmp_path) -> None:
    output = tmp_path / "out" / "docs" / "pnpm-lock.yaml"

    report = prune_lockfile(lockfile_path, ["apps/docs"], output_path=output)

    pruned = decode(output.read_bytes())
    assert pruned.package("file:packages/ui") is not None
    assert "apps/web" not in pruned.importers
    assert report["lockfileVersion"] == "5.4"
    assert report["importers"] == {
        "kept": [
            ".",
            "apps/docs",
            "packages/eslint-config-custom",
            "packages/tsconfig",
            "packages/ui",
        ],
        "removed": ["apps/web"],
        "workspaceDependencies": [
            "packages/eslint-config-custom",
            "packages/tsconfig",
            "packages/ui",
        ],
    }
    assert report["totals"] == {
        "importers": {"kept": 5, "removed": 1},
        "packages": {"kept": 28, "removed": 1},
    }


def test_prune_lockfile_without_output(lockfile_path, tmp_path) -> None:
    report = prune_lockfile(lockfile_path, ["packages/tsconfig"], ["clsx"])

    assert report["totals"]["packages"] == {"kept": 5, "removed": 24}
    assert not (tmp_path / "out").exists()


def test_resolve_in_lockfile(lockfile_path) -> None:
    assert resolve_in_lockfile(lockfile_path, "apps/docs", "next", "12.2.5") == {
        "workspace": "apps/docs",
        "package": "next",
        "specifier": "12.2.5",
        "found": True,
        "version": "12.2.5_ir3quccc6i62x6qn6jjhyjjiey",
        "key": "/next/12.2.5_ir3quccc6i62x6qn6jjhyjjiey",
    }
    result = resolve_in_lockfile(lockfile_path, "apps/web", "ui", "workspace:*")
    assert result["found"] is True
    assert result["key"] is None


def test_render_summary(lockfile_path) -> None:
    summary = render_summary(prune_lockfile(lockfile_path, ["apps/docs"]))

    assert summary.startswith("# pnpm lockfile prune summary\n")
    assert "Packages kept: 28 | removed: 1\n" in summary
    assert "| apps/docs | kept |\n" in summary
    assert "| packages/ui | kept (workspace dependency) |\n" in summary
    assert "| apps/web | removed |\n" in summary


def test_render_summary_without_importers() -> None:
    summary = render_summary({})

    assert "| (no importers) | n/a |" in summary
    assert "Packages kept: 0 | removed: 0" in summary
