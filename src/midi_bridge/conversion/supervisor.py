"""
Supervision of a single command run through the WSL bridge.

The supervisor blocks until the process exits or the timeout elapses, so it
is meant to be called from a worker thread (see the orchestrator).
"""
import os
import signal
import subprocess
import threading
import time
from typing import IO, List, Optional, Sequence

from .models import ProcessOutcome
from ..utils.exceptions import LaunchError
from ..utils.logging import BridgeLogger, get_logger

# Grace period for reader threads to drain the pipes after the process ends
READER_JOIN_TIMEOUT = 5.0


class ProcessSupervisor:
    """Launch a shell command through the bridge and capture its output."""

    def __init__(self, bridge_command: Sequence[str], logger: Optional[BridgeLogger] = None):
        self.bridge_command = list(bridge_command)
        self.logger = logger or get_logger("ProcessSupervisor")

    def run(self, command: str, timeout: float) -> ProcessOutcome:
        """
        Run ``command`` in the foreign environment.

        Args:
            command: Shell command line executed by the bridge's shell
            timeout: Wall-clock limit in seconds

        Returns:
            ProcessOutcome: Captured output and exit status. A non-zero exit
            code is reported here, not raised.

        Raises:
            LaunchError: If the bridge executable could not be started
        """
        argv = self.bridge_command + [command]
        self.logger.info(f"Executing command: {command}")

        try:
            process = subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
                start_new_session=(os.name == "posix"),
            )
        except OSError as e:
            raise LaunchError(
                f"Failed to start {self.bridge_command[0]}: {e}",
                details={"argv": argv}
            ) from e

        stdout_lines: List[str] = []
        stderr_lines: List[str] = []
        readers = [
            threading.Thread(
                target=self._pump, args=(process.stdout, stdout_lines, self.logger.info, "Program output"),
                daemon=True
            ),
            threading.Thread(
                target=self._pump, args=(process.stderr, stderr_lines, self.logger.error, "Program error"),
                daemon=True
            ),
        ]
        for reader in readers:
            reader.start()

        start_time = time.monotonic()
        timed_out = False
        try:
            process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            timed_out = True
            self.logger.warning(f"Process {process.pid} exceeded {timeout}s, terminating")
            self._kill(process)
        finally:
            if process.poll() is None:
                self._kill(process)
            for reader in readers:
                reader.join(READER_JOIN_TIMEOUT)
        duration = time.monotonic() - start_time

        outcome = ProcessOutcome(
            exit_completed=not timed_out,
            exit_code=None if timed_out else process.returncode,
            stdout="\n".join(stdout_lines),
            stderr="\n".join(stderr_lines),
            timed_out=timed_out,
            pid=process.pid,
            duration=duration,
        )

        if timed_out:
            self.logger.warning(f"Process timed out after {duration:.1f}s")
        else:
            self.logger.info(f"Process exit code: {outcome.exit_code} ({duration:.1f}s)")
        self.logger.debug(f"Full output: {outcome.stdout}")
        self.logger.debug(f"Full error output: {outcome.stderr}")

        return outcome

    @staticmethod
    def _pump(stream: IO[str], sink: List[str], log, label: str) -> None:
        with stream:
            for line in stream:
                line = line.rstrip("\r\n")
                if line:
                    sink.append(line)
                    log(f"{label}: {line}")

    @staticmethod
    def _kill(process: subprocess.Popen) -> None:
        """Kill the process (and its group on POSIX) and reap it."""
        if os.name == "posix":
            try:
                os.killpg(process.pid, signal.SIGKILL)
            except ProcessLookupError:
                pass
        else:
            process.kill()
        process.wait()
