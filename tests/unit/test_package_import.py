from __future__ import annotations

"""
Import smoke tests.

Imports the package in a fresh interpreter, outside of the shared test
fixtures, so module-level registration runs exactly as it does for users.
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).resolve().parent.parent.parent / "src"


def _import_in_subprocess(statement: str) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    return subprocess.run(
        [sys.executable, "-c", statement],
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


@pytest.mark.parametrize(
    "module",
    [
        "auxdeps",
        "auxdeps.core.analysis.aux_replacements",
        "auxdeps.interface.cli.app",
        "auxdeps.main",
    ],
)
def test_module_imports_cleanly(module):
    result = _import_in_subprocess(f"import {module}")
    assert result.returncode == 0, result.stderr


def test_builtins_are_registered_on_import():
    result = _import_in_subprocess(
        "from auxdeps import AUX_REPLACEMENTS; print(len(AUX_REPLACEMENTS))"
    )

    assert result.returncode == 0, result.stderr
    assert int(result.stdout.strip()) == 12
