"""Pydantic models for request and response bodies.

These models express the structure exchanged with the collaboration
server's ``/api/execute`` endpoint.  An execution response carries either
``output`` (on success) or ``error`` (on failure), never both; unset fields
are excluded from serialised responses.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .executor import ExecutionOutcome


class ExecuteRequest(BaseModel):
    """Request body for executing code."""

    code: Optional[str] = Field(default=None, description="Source code to execute.")
    language: Optional[str] = Field(
        default=None,
        description="Language identifier, e.g. 'python' or 'cpp'. Case-insensitive.",
    )


class ExecuteResponse(BaseModel):
    """Response body for code execution."""

    success: bool
    output: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: ExecutionOutcome) -> "ExecuteResponse":
        return cls(**outcome.to_dict())


class LanguagesResponse(BaseModel):
    """Supported language identifiers in registry order."""

    languages: List[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str
    timestamp: str
