"""Tests for importing the package in a clean interpreter."""

import os
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent

IMPORT_AND_BUILD_SNAPSHOT = """
import datetime
import logging

import cfg_rust_features
from cfg_rust_features.toolchain import Channel, RustcVersion, ToolchainSnapshot

snapshot = ToolchainSnapshot(RustcVersion(1, 70, 0), Channel.STABLE, datetime.date(2023, 5, 31))
assert snapshot.date == datetime.date(2023, 5, 31)
assert logging.getLogger().handlers == []
"""


def _run_python(code: str, cwd: Path, **env: str) -> subprocess.CompletedProcess:
    pythonpath = os.pathsep.join(filter(None, [str(REPO_ROOT), os.environ.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-c", code],
        cwd=cwd,
        env={**os.environ, "PYTHONPATH": pythonpath, **env},
        capture_output=True,
        text=True,
        timeout=60,
    )


def test_import_and_build_snapshot(tmp_path):
    """The package imports, builds a snapshot, and leaves stdout and the root logger alone."""
    result = _run_python(IMPORT_AND_BUILD_SNAPSHOT, tmp_path)
    assert result.returncode == 0, result.stderr
    assert result.stdout == ""


def test_import_ignores_logging_settings(tmp_path):
    """A bad logging level in the environment does not break the import."""
    result = _run_python(
        IMPORT_AND_BUILD_SNAPSHOT, tmp_path, CFG_RUST_FEATURES_LOGGING__LEVEL="LOUD"
    )
    assert result.returncode == 0, result.stderr
