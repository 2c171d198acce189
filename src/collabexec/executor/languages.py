"""
Language registry.

Maps a language identifier to the :class:`LanguageProfile` describing how
to realise that language as one or two external processes.  Resolution is
a pure lookup and never touches the filesystem or spawns anything.

Command templates are tuples of strings that may contain the placeholders
``{source}`` (absolute path of the staged source file), ``{artifact}``
(absolute path of the compiled program), ``{workdir}`` (workspace root) and
``{entry}`` (name derived from the source text).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple


class ExecutionMode(str, Enum):
    """How a language's toolchain turns source into a running program."""

    INTERPRET = "interpret"
    COMPILE_THEN_RUN = "compile_then_run"
    COMPILE_THEN_RUN_WITH_DERIVED_NAME = "compile_then_run_with_derived_name"


@dataclass(frozen=True)
class LanguageProfile:
    id: str
    display_name: str
    invocation: Tuple[str, ...]
    source_extension: str
    mode: ExecutionMode = ExecutionMode.INTERPRET
    run_invocation: Tuple[str, ...] = ()
    entry_pattern: Optional[str] = None
    artifact_name: str = "output"

    @property
    def source_filename(self) -> str:
        """File name used when the language does not derive one from the source."""
        return f"code{self.source_extension}"

    def derive_entry_name(self, code: str) -> Optional[str]:
        """Extract the program entry-point name from ``code``, if any."""
        if self.entry_pattern is None:
            return None
        match = re.search(self.entry_pattern, code)
        return match.group(1) if match else None


_PROFILES = (
    LanguageProfile("javascript", "JavaScript", ("node", "{source}"), ".js"),
    LanguageProfile("python", "Python", ("python3", "{source}"), ".py"),
    LanguageProfile(
        "java",
        "Java",
        ("javac", "{source}"),
        ".java",
        mode=ExecutionMode.COMPILE_THEN_RUN_WITH_DERIVED_NAME,
        run_invocation=("java", "-cp", "{workdir}", "{entry}"),
        entry_pattern=r"public\s+class\s+(\w+)",
    ),
    LanguageProfile(
        "cpp",
        "C++",
        ("g++", "-o", "{artifact}", "{source}"),
        ".cpp",
        mode=ExecutionMode.COMPILE_THEN_RUN,
        run_invocation=("{artifact}",),
    ),
    LanguageProfile(
        "c",
        "C",
        ("gcc", "-o", "{artifact}", "{source}"),
        ".c",
        mode=ExecutionMode.COMPILE_THEN_RUN,
        run_invocation=("{artifact}",),
    ),
    LanguageProfile("ruby", "Ruby", ("ruby", "{source}"), ".rb"),
    # ``go run`` compiles and executes in a single step.
    LanguageProfile("go", "Go", ("go", "run", "{source}"), ".go"),
    LanguageProfile("php", "PHP", ("php", "{source}"), ".php"),
    LanguageProfile("bash", "Bash", ("bash", "{source}"), ".sh"),
    LanguageProfile("perl", "Perl", ("perl", "{source}"), ".pl"),
)

REGISTRY: Dict[str, LanguageProfile] = {profile.id: profile for profile in _PROFILES}


def lookup(language_id: str) -> Optional[LanguageProfile]:
    """Return the profile for ``language_id`` (case-insensitive) or ``None``."""
    return REGISTRY.get(language_id.strip().lower())


def supported_languages() -> List[str]:
    """Registered identifiers in registry order."""
    return list(REGISTRY)


def unsupported_language_message(language_id: str) -> str:
    return (
        f"Language '{language_id}' is not supported.\n"
        f"Supported: {', '.join(supported_languages())}"
    )
