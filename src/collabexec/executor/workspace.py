"""Ephemeral per-execution workspaces.

Each execution gets its own directory under a configurable base directory.
Directory names come from a random UUID, never from request content, so
concurrent executions cannot collide.  Workspaces are removed as soon as
the execution finishes; use :meth:`WorkspaceManager.acquire` so removal
happens on every exit path.
"""

from __future__ import annotations

import logging
import shutil
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Workspace:
    """A directory exclusively owned by one execution."""

    root: Path

    def path(self, relative_path: str) -> Path:
        return self.root / relative_path


class WorkspaceManager:
    """Create, populate and remove workspaces under ``base_dir``."""

    def __init__(self, base_dir: str | Path) -> None:
        self.base_dir = Path(base_dir)

    def create(self) -> Workspace:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        root = self.base_dir / uuid.uuid4().hex
        # exist_ok=False: a name clash must fail rather than share a directory
        root.mkdir(exist_ok=False)
        logger.debug("Created workspace %s", root)
        return Workspace(root)

    def write_source(self, workspace: Workspace, filename: str, text: str) -> Path:
        """Write ``text`` to ``filename`` inside the workspace and return its path."""
        dest = workspace.path(filename)
        root = workspace.root.resolve()
        resolved = dest.resolve()
        if resolved == root or root not in resolved.parents:
            raise ValueError(f"Path escapes workspace: {filename}")
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(text, encoding="utf-8")
        return dest

    def destroy(self, workspace: Workspace) -> None:
        """Remove the workspace tree.  Safe to call more than once."""
        try:
            shutil.rmtree(workspace.root)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Failed to clean up workspace %s: %s", workspace.root, exc)
        else:
            logger.debug("Removed workspace %s", workspace.root)

    @contextmanager
    def acquire(self) -> Iterator[Workspace]:
        workspace = self.create()
        try:
            yield workspace
        finally:
            self.destroy(workspace)
