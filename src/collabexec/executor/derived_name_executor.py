"""
Executor for languages whose file name must match a name in the source.

Java requires a public class ``Foo`` to live in ``Foo.java`` and is run by
class name rather than by path.  The name is extracted from the source text
with the profile's ``entry_pattern`` before anything is compiled; source
without a match fails without invoking the compiler.
"""

from __future__ import annotations

from .base import CodeExecutor
from .languages import LanguageProfile
from .outcome import ErrorKind, ExecutionOutcome, Failure, Success, as_compile_failure
from .workspace import Workspace


class DerivedNameExecutor(CodeExecutor):
    """Compile ``<Name><ext>`` and run the program named ``Name``."""

    def execute(
        self,
        profile: LanguageProfile,
        workspace: Workspace,
        code: str,
    ) -> ExecutionOutcome:
        entry = profile.derive_entry_name(code)
        if entry is None:
            return Failure(
                f"No public class found in {profile.display_name} code",
                ErrorKind.INTERNAL_ERROR,
            )

        source = self.workspaces.write_source(
            workspace, f"{entry}{profile.source_extension}", code
        )
        compiled = self._invoke(profile.invocation, workspace, source=str(source), entry=entry)
        if not isinstance(compiled, Success):
            return as_compile_failure(compiled)

        return self._invoke(profile.run_invocation, workspace, source=str(source), entry=entry)
