"""
Execution pipeline.

:class:`ExecutionPipeline` is the single entry point used by the API:
``execute(code, language)`` resolves the language, waits for a free
execution slot, stages a fresh workspace, hands it to the executor for the
language's mode and always removes the workspace afterwards.

Failures of every kind come back as
:class:`~collabexec.executor.outcome.Failure` values.  Exceptions raised
while staging or running are logged and converted, never propagated.
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Dict, Optional

from .base import CodeExecutor
from .compiled_executor import CompiledExecutor
from .derived_name_executor import DerivedNameExecutor
from .interpreted_executor import InterpretedExecutor
from .languages import ExecutionMode, lookup, unsupported_language_message
from .outcome import ErrorKind, ExecutionOutcome, Failure
from .runner import ProcessRunner
from .workspace import WorkspaceManager

logger = logging.getLogger(__name__)

CAPACITY_EXHAUSTED_MESSAGE = "Execution capacity exhausted, try again later"


class ExecutionPipeline:
    """Orchestrate one-shot executions with bounded concurrency."""

    def __init__(
        self,
        workspace_root: str | Path,
        timeout: float = 10,
        max_concurrency: int = 4,
        queue_timeout: Optional[float] = 30,
        runner: Optional[ProcessRunner] = None,
    ) -> None:
        """
        Parameters
        ----------
        workspace_root: str or Path
            Directory under which per-execution workspaces are created.
        timeout: float, optional
            Deadline in seconds for every compile and run phase.
        max_concurrency: int, optional
            Executions allowed in flight at once.
        queue_timeout: float, optional
            Maximum wait for a free slot; ``None`` waits indefinitely.
            Must not be negative.
        runner: ProcessRunner, optional
            Process runner shared by all executors.
        """
        if queue_timeout is not None and queue_timeout < 0:
            raise ValueError(f"queue_timeout must not be negative, got {queue_timeout}")
        self.timeout = timeout
        self.queue_timeout = queue_timeout
        self.workspaces = WorkspaceManager(workspace_root)
        self.runner = runner or ProcessRunner()
        self._slots = threading.BoundedSemaphore(max_concurrency)
        self.executors: Dict[ExecutionMode, CodeExecutor] = {
            ExecutionMode.INTERPRET: InterpretedExecutor(self.runner, self.workspaces, timeout),
            ExecutionMode.COMPILE_THEN_RUN: CompiledExecutor(
                self.runner, self.workspaces, timeout
            ),
            ExecutionMode.COMPILE_THEN_RUN_WITH_DERIVED_NAME: DerivedNameExecutor(
                self.runner, self.workspaces, timeout
            ),
        }

    def execute(self, code: str, language: str) -> ExecutionOutcome:
        profile = lookup(language)
        if profile is None:
            logger.warning("Unsupported language requested: %s", language)
            return Failure(
                unsupported_language_message(language.strip().lower()),
                ErrorKind.UNSUPPORTED_LANGUAGE,
            )

        if not self._slots.acquire(timeout=self.queue_timeout):
            logger.warning("No free execution slot after %ss", self.queue_timeout)
            return Failure(CAPACITY_EXHAUSTED_MESSAGE, ErrorKind.INTERNAL_ERROR)

        start_time = time.perf_counter()
        try:
            with self.workspaces.acquire() as workspace:
                logger.info("Running %s code in %s", profile.id, workspace.root)
                outcome = self.executors[profile.mode].execute(profile, workspace, code)
        except Exception as exc:
            logger.exception("Unhandled error while executing %s code: %s", profile.id, exc)
            outcome = Failure(str(exc) or type(exc).__name__, ErrorKind.INTERNAL_ERROR)
        finally:
            self._slots.release()

        logger.info(
            "Finished %s execution in %sms: %s",
            profile.id,
            int((time.perf_counter() - start_time) * 1000),
            "success" if outcome.success else outcome.kind.value,
        )
        return outcome
