# pingtrace/prober/process.py
import logging
import subprocess
import threading
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence

from pingtrace.prober.base import ProcessRunner

logger = logging.getLogger(__name__)


@dataclass
class ProcessHandle:
    proc: subprocess.Popen
    watchdog: Optional[threading.Timer] = None
    killed: threading.Event = field(default_factory=threading.Event)


class SubprocessRunner(ProcessRunner):
    """
    Runs commands with subprocess.Popen. With a timeout, a watchdog timer
    kills the process once the deadline passes, which ends the stdout
    stream so a blocked read_lines() returns.
    """

    def spawn(self, command: Sequence[str], timeout_sec: float | None = None) -> ProcessHandle:
        # PermissionError / FileNotFoundError / OSError propagate to the prober
        proc = subprocess.Popen(
            [str(c) for c in command],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            stdin=subprocess.DEVNULL,
            text=True,
        )
        handle = ProcessHandle(proc=proc)
        if timeout_sec:
            handle.watchdog = threading.Timer(timeout_sec, self._kill, args=(handle,))
            handle.watchdog.daemon = True
            handle.watchdog.start()
        return handle

    def _kill(self, handle: ProcessHandle) -> None:
        if handle.proc.poll() is None:
            logger.debug("killing pid %s after deadline", handle.proc.pid)
            handle.killed.set()
            handle.proc.kill()

    def read_lines(self, handle: ProcessHandle) -> Iterator[str]:
        for line in handle.proc.stdout:
            yield line.rstrip("\r\n")

    def timed_out(self, handle: ProcessHandle) -> bool:
        return handle.killed.is_set()

    def close(self, handle: ProcessHandle) -> None:
        if handle.watchdog is not None:
            handle.watchdog.cancel()
        proc = handle.proc
        if proc.poll() is None:
            proc.kill()
        if proc.stdout is not None:
            proc.stdout.close()
        proc.wait()
