"""
Shared test fixtures for collabexec tests.
"""
from __future__ import annotations

import shutil
from pathlib import Path
from typing import List, Sequence, Tuple

import pytest

from collabexec.executor import ExecutionOutcome, ExecutionPipeline, ProcessRunner


def requires(*commands: str):
    """Skip the test unless every command is on PATH."""
    missing = [cmd for cmd in commands if shutil.which(cmd) is None]
    return pytest.mark.skipif(bool(missing), reason=f"missing toolchain: {', '.join(missing)}")


class RecordingRunner(ProcessRunner):
    """Runner double that replays canned outcomes and records every call."""

    def __init__(self, *outcomes: ExecutionOutcome) -> None:
        self.outcomes = list(outcomes)
        self.calls: List[Tuple[str, List[str], Path]] = []
        self.files_seen: List[List[str]] = []

    def run(self, command: str, args: Sequence[str], cwd: Path, timeout: float) -> ExecutionOutcome:
        cwd = Path(cwd)
        self.calls.append((command, list(args), cwd))
        self.files_seen.append(sorted(p.name for p in cwd.iterdir()))
        return self.outcomes.pop(0)


@pytest.fixture
def workspace_root(tmp_path) -> Path:
    return tmp_path / "codecollab-exec"


@pytest.fixture
def pipeline(workspace_root) -> ExecutionPipeline:
    return ExecutionPipeline(workspace_root, timeout=10, max_concurrency=4)


def leftover_workspaces(workspace_root: Path) -> List[Path]:
    if not workspace_root.exists():
        return []
    return list(workspace_root.iterdir())
