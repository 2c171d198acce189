"""
Execution engine for the code execution service.

A request flows through :class:`ExecutionPipeline`, which looks the
language up in the registry (``languages``), stages a workspace
(``workspace``) and hands both to the executor for the language's mode.
Executors write the source file and drive the :class:`ProcessRunner`,
which enforces the wall-clock deadline on each external command.
Additional languages are added by registering a ``LanguageProfile``;
additional modes by implementing the ``CodeExecutor`` interface from
``base.py``.
"""

from .base import CodeExecutor
from .compiled_executor import CompiledExecutor
from .derived_name_executor import DerivedNameExecutor
from .interpreted_executor import InterpretedExecutor
from .languages import ExecutionMode, LanguageProfile, REGISTRY, lookup, supported_languages
from .outcome import ErrorKind, ExecutionOutcome, Failure, Success
from .pipeline import ExecutionPipeline
from .runner import ProcessRunner
from .workspace import Workspace, WorkspaceManager

__all__ = [
    "CodeExecutor",
    "CompiledExecutor",
    "DerivedNameExecutor",
    "InterpretedExecutor",
    "ExecutionMode",
    "LanguageProfile",
    "REGISTRY",
    "lookup",
    "supported_languages",
    "ErrorKind",
    "ExecutionOutcome",
    "Failure",
    "Success",
    "ExecutionPipeline",
    "ProcessRunner",
    "Workspace",
    "WorkspaceManager",
]
