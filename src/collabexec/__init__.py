"""Code execution service package.

This package runs untrusted snippets for the collaborative editor.  Given
source text and a language identifier it compiles and/or runs the code
with the matching external toolchain inside a throwaway workspace, under a
per-phase wall-clock deadline, and returns the program output or a single
error message.  It bounds time and cleans up after itself; it does not
isolate the program from the host.

The top-level modules include:

* ``config`` – configuration handling for environment variables.
* ``models`` – Pydantic models defining request and response schemas.
* ``executor`` – language registry, workspaces, process runner and the
  execution pipeline.
* ``api`` – FastAPI application exposing HTTP endpoints.
"""

__version__ = "0.1.0"
