"""Run every example script and compare stdout with its ``# =>`` annotations."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
EXAMPLES_ROOT = REPO_ROOT / "examples"
SRC_ROOT = REPO_ROOT / "src"
EXPECTATION_MARKER = "# =>"


def _example_paths() -> list[Path]:
    return sorted(EXAMPLES_ROOT.glob("ex_*/01_*.py"))


def _expected_stdout(path: Path) -> list[str]:
    return [
        line.split(EXPECTATION_MARKER, maxsplit=1)[1].strip()
        for line in path.read_text(encoding="utf-8").splitlines()
        if "print(" in line and EXPECTATION_MARKER in line
    ]


def test_every_topic_has_an_example() -> None:
    assert len(_example_paths()) == len(list(EXAMPLES_ROOT.glob("ex_*")))


@pytest.mark.parametrize(
    "path",
    [pytest.param(path, id=path.parent.name) for path in _example_paths()],
)
def test_example_stdout_matches_annotations(path: Path) -> None:
    env = {**os.environ, "PYTHONPATH": os.pathsep.join(filter(None, (str(SRC_ROOT), os.environ.get("PYTHONPATH"))))}

    completed = subprocess.run(  # noqa: S603
        [sys.executable, str(path)],
        cwd=path.parent,
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )

    assert completed.returncode == 0, completed.stderr
    assert completed.stderr == ""
    assert completed.stdout.splitlines() == _expected_stdout(path)
