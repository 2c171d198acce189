"""
Executor for compiled languages.

The source is written to ``code<ext>`` and compiled into an artifact inside
the workspace.  The artifact's absolute path is handed from the compile
step to the run step, so nothing depends on the shell resolving a relative
``./output``.  If compilation fails the program is never run.
"""

from __future__ import annotations

import logging
import os

from .base import CodeExecutor
from .languages import LanguageProfile
from .outcome import ExecutionOutcome, Success, as_compile_failure
from .workspace import Workspace

logger = logging.getLogger(__name__)


class CompiledExecutor(CodeExecutor):
    """Compile to a native artifact, then run the artifact."""

    def execute(
        self,
        profile: LanguageProfile,
        workspace: Workspace,
        code: str,
    ) -> ExecutionOutcome:
        source = self.workspaces.write_source(workspace, profile.source_filename, code)
        artifact_name = profile.artifact_name
        if os.name == "nt":
            artifact_name += ".exe"
        artifact = workspace.path(artifact_name)

        compiled = self._invoke(
            profile.invocation, workspace, source=str(source), artifact=str(artifact)
        )
        if not isinstance(compiled, Success):
            logger.info("%s compilation failed in %s", profile.display_name, workspace.root)
            return as_compile_failure(compiled)

        return self._invoke(
            profile.run_invocation, workspace, source=str(source), artifact=str(artifact)
        )
