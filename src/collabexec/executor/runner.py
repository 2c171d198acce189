"""
Process runner.

Runs a single external command in a working directory under a wall-clock
deadline and turns whatever happens into one
:data:`~collabexec.executor.outcome.ExecutionOutcome`.

The deadline timer and the natural exit of the process race each other.
Both report through a :class:`_Settlement`, which accepts the first
outcome and ignores every later one, so a process killed for timeout is
never also reported through its exit status and vice versa.

Output is read until the pipes close.  A descendant that left the process
group can hold them open past the deadline, so reading stops
``KILL_GRACE_SECONDS`` after it and the unread output is discarded.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import threading
import time
from pathlib import Path
from typing import Optional, Sequence

from .outcome import ErrorKind, ExecutionOutcome, Failure, Success

logger = logging.getLogger(__name__)

NO_OUTPUT_MESSAGE = "Code executed successfully (no output)"

# How long past the deadline to keep reading pipes held by escaped descendants.
KILL_GRACE_SECONDS = 0.5


class _Settlement:
    """Single-assignment slot for the outcome of one process."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._outcome: Optional[ExecutionOutcome] = None

    @property
    def settled(self) -> bool:
        return self._outcome is not None

    @property
    def outcome(self) -> Optional[ExecutionOutcome]:
        return self._outcome

    def settle(self, outcome: ExecutionOutcome) -> bool:
        """Record ``outcome`` unless one was recorded already.

        Returns ``True`` if this call won.
        """
        with self._lock:
            if self._outcome is not None:
                return False
            self._outcome = outcome
            return True


def _format_seconds(seconds: float) -> str:
    return f"{seconds:g} second" + ("" if seconds == 1 else "s")


def _kill(process: subprocess.Popen) -> None:
    """SIGKILL the process and everything in its process group."""
    try:
        if hasattr(os, "killpg"):
            os.killpg(process.pid, signal.SIGKILL)
        else:
            process.kill()
    except (ProcessLookupError, PermissionError):
        # Already exited.
        pass


def _abandon_pipes(process: subprocess.Popen) -> None:
    """Stop reading from ``process`` and reap it; unread output is lost."""
    for stream in (process.stdout, process.stderr):
        if stream is None:
            continue
        try:
            stream.close()
        except OSError:
            pass
    process.wait()


class ProcessRunner:
    """Run one command at a time per call; instances hold no per-call state."""

    def run(
        self,
        command: str,
        args: Sequence[str],
        cwd: Path,
        timeout: float,
    ) -> ExecutionOutcome:
        """
        Run ``command`` with ``args`` in ``cwd`` and wait for it to settle.

        Parameters
        ----------
        command: str
            Executable name (looked up on ``PATH``) or path.
        args: Sequence[str]
            Arguments passed after the command.
        cwd: Path
            Working directory for the process.
        timeout: float
            Deadline in seconds, measured from spawn.

        Returns
        -------
        ExecutionOutcome
            ``Success`` for exit status zero, ``Failure`` otherwise.
        """
        argv = [command, *args]
        start_time = time.perf_counter()
        try:
            process = subprocess.Popen(
                argv,
                cwd=str(cwd),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                start_new_session=hasattr(os, "killpg"),
            )
        except FileNotFoundError:
            logger.warning("Toolchain command not found: %s", command)
            return Failure(
                f"Command '{command}' not found. Please install {command}.",
                ErrorKind.TOOLCHAIN_MISSING,
            )
        except OSError as exc:
            logger.warning("Failed to launch %s: %s", command, exc)
            return Failure(str(exc), ErrorKind.INTERNAL_ERROR)

        settlement = _Settlement()
        timed_out = Failure(f"Execution timeout ({_format_seconds(timeout)})", ErrorKind.TIMEOUT)

        def on_deadline() -> None:
            if process.poll() is not None:
                # Exited before the deadline; the exit status settles it.
                return
            if settlement.settle(timed_out):
                logger.warning(
                    "Killing %s (pid %s) after %ss deadline", command, process.pid, timeout
                )
                _kill(process)

        timer = threading.Timer(timeout, on_deadline)
        timer.daemon = True
        timer.start()

        try:
            stdout, stderr = process.communicate(timeout=timeout + KILL_GRACE_SECONDS)
        except subprocess.TimeoutExpired:
            # A descendant outside the process group still holds the pipes open.
            settlement.settle(timed_out)
            logger.warning(
                "Abandoning output of %s (pid %s): pipes still open after deadline",
                command,
                process.pid,
            )
            if process.poll() is None:
                _kill(process)
            _abandon_pipes(process)
            stdout = stderr = ""
        except BaseException:
            _kill(process)
            process.wait()
            raise
        finally:
            timer.cancel()

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        exit_code = process.returncode
        if exit_code == 0:
            natural: ExecutionOutcome = Success(stdout or NO_OUTPUT_MESSAGE)
        else:
            natural = Failure(
                stderr or stdout or f"Process exited with code {exit_code}",
                ErrorKind.RUNTIME_ERROR,
            )
        # Loses to the timer if the deadline already fired; output is dropped then.
        settlement.settle(natural)

        logger.debug(
            "%s exited with %s after %sms (settled as %s)",
            command,
            exit_code,
            duration_ms,
            "success" if settlement.outcome.success else settlement.outcome.kind.value,
        )
        return settlement.outcome
