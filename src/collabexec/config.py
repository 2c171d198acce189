"""Configuration loader.

The execution service reads its configuration from environment variables so
the same package can run embedded in the collaboration server, as a
standalone microservice or inside tests.  Reasonable defaults are provided
so that local development works out of the box.

Environment variables:

``COLLABEXEC_API_KEY``
    Optional shared secret.  When set, every request except the health
    check must carry this value in the ``x-api-key`` header.  End-user
    authentication is handled by the calling service, not here.

``COLLABEXEC_WORKSPACE_ROOT``
    Directory under which per-request workspaces are created.  Defaults to
    ``codecollab-exec`` inside the host's temporary directory.

``COLLABEXEC_TIMEOUT_SECONDS``
    Wall-clock deadline (in seconds) applied to every compile and run
    phase.  Default is 10.

``COLLABEXEC_MAX_CONCURRENCY``
    Number of executions allowed to run at the same time.  Further
    requests wait for a free slot.  Default is 4.

``COLLABEXEC_QUEUE_TIMEOUT_SECONDS``
    How long a request may wait for a free slot before it is rejected.
    Default is 30.

``COLLABEXEC_LOG_LEVEL``
    Log level for the ``collabexec`` logger.  Defaults to ``INFO``.

``PORT``
    The port on which the API server listens.  Defaults to 3001.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass

DEFAULT_WORKSPACE_DIRNAME = "codecollab-exec"


@dataclass
class Config:
    """Centralised configuration object."""

    api_key: str
    workspace_root: str
    timeout_seconds: float
    max_concurrency: int
    queue_timeout_seconds: float
    log_level: str
    port: int

    @classmethod
    def load(cls) -> "Config":
        api_key = os.getenv("COLLABEXEC_API_KEY", "")

        workspace_root = os.getenv("COLLABEXEC_WORKSPACE_ROOT") or os.path.join(
            tempfile.gettempdir(), DEFAULT_WORKSPACE_DIRNAME
        )

        def _int_var(name: str, default: int) -> int:
            val = os.getenv(name)
            if val is None:
                return default
            try:
                return int(val)
            except ValueError:
                raise ValueError(f"Invalid integer for {name}: {val}")

        def _float_var(name: str, default: float) -> float:
            val = os.getenv(name)
            if val is None:
                return default
            try:
                return float(val)
            except ValueError:
                raise ValueError(f"Invalid number for {name}: {val}")

        timeout_seconds = _float_var("COLLABEXEC_TIMEOUT_SECONDS", 10)
        if timeout_seconds <= 0:
            raise ValueError(
                f"COLLABEXEC_TIMEOUT_SECONDS must be positive, got {timeout_seconds}"
            )
        max_concurrency = _int_var("COLLABEXEC_MAX_CONCURRENCY", 4)
        if max_concurrency < 1:
            raise ValueError(
                f"COLLABEXEC_MAX_CONCURRENCY must be at least 1, got {max_concurrency}"
            )
        queue_timeout_seconds = _float_var("COLLABEXEC_QUEUE_TIMEOUT_SECONDS", 30)
        if queue_timeout_seconds < 0:
            raise ValueError(
                f"COLLABEXEC_QUEUE_TIMEOUT_SECONDS must not be negative, got {queue_timeout_seconds}"
            )
        log_level = os.getenv("COLLABEXEC_LOG_LEVEL", "INFO").upper()
        port = _int_var("PORT", 3001)

        return cls(
            api_key=api_key,
            workspace_root=workspace_root,
            timeout_seconds=timeout_seconds,
            max_concurrency=max_concurrency,
            queue_timeout_seconds=queue_timeout_seconds,
            log_level=log_level,
            port=port,
        )

    @classmethod
    def from_env(cls) -> "Config":
        """
        Alternate constructor used by the API to load configuration.

        This wrapper calls :meth:`load` to construct the configuration.
        It exists to provide a more intuitive name when consumed in
        application code.
        """
        return cls.load()
