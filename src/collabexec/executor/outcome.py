"""
Execution outcomes.

Every execution ends in exactly one :data:`ExecutionOutcome`: either a
:class:`Success` carrying the program output or a :class:`Failure`
carrying a human-readable message and an :class:`ErrorKind`.  Outcomes
are plain values; failures are never raised past the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union


class ErrorKind(str, Enum):
    """Classification of failed executions."""

    UNSUPPORTED_LANGUAGE = "unsupported_language"
    COMPILE_ERROR = "compile_error"
    RUNTIME_ERROR = "runtime_error"
    TIMEOUT = "timeout"
    TOOLCHAIN_MISSING = "toolchain_missing"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class Success:
    """The program ran to completion with exit status zero."""

    output: str

    @property
    def success(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, object]:
        return {"success": True, "output": self.output}


@dataclass(frozen=True)
class Failure:
    """The execution did not produce a successful run.

    Attributes
    ----------
    message: str
        Text shown to the caller (compiler diagnostics, stderr, etc.).
    kind: ErrorKind
        Why the execution failed.
    """

    message: str
    kind: ErrorKind

    @property
    def success(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, object]:
        return {"success": False, "error": self.message}


ExecutionOutcome = Union[Success, Failure]


def as_compile_failure(outcome: ExecutionOutcome) -> ExecutionOutcome:
    """Reclassify the outcome of a compile phase.

    A toolchain that runs but exits non-zero rejected the source, so the
    runner's ``runtime_error`` becomes ``compile_error``.  Timeouts and
    missing toolchains keep their kind.
    """
    if isinstance(outcome, Failure) and outcome.kind is ErrorKind.RUNTIME_ERROR:
        return Failure(outcome.message, ErrorKind.COMPILE_ERROR)
    return outcome
