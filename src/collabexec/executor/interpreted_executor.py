"""
Executor for interpreted languages.

The source is written to ``code<ext>`` in the workspace and the language's
interpreter is invoked on that file.  Single-step compile-and-run commands
such as ``go run`` are handled here as well since they need no separate
run phase.
"""

from __future__ import annotations

from .base import CodeExecutor
from .languages import LanguageProfile
from .outcome import ExecutionOutcome
from .workspace import Workspace


class InterpretedExecutor(CodeExecutor):
    """Run source directly with an interpreter."""

    def execute(
        self,
        profile: LanguageProfile,
        workspace: Workspace,
        code: str,
    ) -> ExecutionOutcome:
        source = self.workspaces.write_source(workspace, profile.source_filename, code)
        return self._invoke(profile.invocation, workspace, source=str(source))
