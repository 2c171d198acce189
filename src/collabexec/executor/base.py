"""
Base interface for mode executors.

All concrete executors inherit from :class:`CodeExecutor` and implement
the :meth:`execute` method for one
:class:`~collabexec.executor.languages.ExecutionMode`.  Executors are
responsible for writing the user's source into the workspace they are
handed and for driving one or two
:class:`~collabexec.executor.runner.ProcessRunner` invocations.

Executors never create or remove workspaces; the pipeline owns the
workspace lifecycle.  Wall-clock deadlines are applied per runner
invocation, so a compile-then-run execution has two independent
deadlines.
"""

from __future__ import annotations

import abc
from typing import Sequence

from .languages import LanguageProfile
from .outcome import ExecutionOutcome
from .runner import ProcessRunner
from .workspace import Workspace, WorkspaceManager


class CodeExecutor(abc.ABC):
    """
    Abstract base class defining the interface for mode executors.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        workspaces: WorkspaceManager,
        timeout: float = 10,
    ) -> None:
        """
        Parameters
        ----------
        runner: ProcessRunner
            Runs each compile or run command.
        workspaces: WorkspaceManager
            Used to write source files into the workspace.
        timeout: float, optional
            Deadline in seconds for every single runner invocation.
        """
        self.runner = runner
        self.workspaces = workspaces
        self.timeout = timeout

    @abc.abstractmethod
    def execute(
        self,
        profile: LanguageProfile,
        workspace: Workspace,
        code: str,
    ) -> ExecutionOutcome:
        """Stage ``code`` in ``workspace`` and run it as ``profile`` describes.

        Parameters
        ----------
        profile: LanguageProfile
            Registry entry for the requested language.
        workspace: Workspace
            Empty, exclusively owned directory for this execution.
        code: str
            The user supplied source text.

        Returns
        -------
        ExecutionOutcome
            The outcome of the last phase that ran.
        """
        raise NotImplementedError

    def _invoke(
        self,
        template: Sequence[str],
        workspace: Workspace,
        **values: str,
    ) -> ExecutionOutcome:
        """Expand a command template and run it inside ``workspace``."""
        argv = [part.format(workdir=str(workspace.root), **values) for part in template]
        return self.runner.run(argv[0], argv[1:], workspace.root, self.timeout)
