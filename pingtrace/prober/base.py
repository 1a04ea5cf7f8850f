# pingtrace/prober/base.py
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

from pingtrace.schemas import ProbeOutput


class ProcessRunner(ABC):
    """
    The three things a probe needs from the OS: start a command, read its
    stdout line by line, and let go of it. Swapped for a scripted fake in
    tests so no ping binary is ever run.
    """

    @abstractmethod
    def spawn(self, command: Sequence[str], timeout_sec: float | None = None) -> Any:
        """Start ``command`` and return an opaque handle."""
        raise NotImplementedError

    @abstractmethod
    def read_lines(self, handle: Any) -> Iterator[str]:
        """Lazy, finite, single-pass iterator over the handle's stdout lines."""
        raise NotImplementedError

    @abstractmethod
    def close(self, handle: Any) -> None:
        """Release the process and its streams. Must be safe to call twice."""
        raise NotImplementedError

    def timed_out(self, handle: Any) -> bool:
        return False

    @contextmanager
    def running(self, command: Sequence[str], timeout_sec: float | None = None):
        handle = self.spawn(command, timeout_sec=timeout_sec)
        try:
            yield handle
        finally:
            self.close(handle)


class Prober(ABC):
    @abstractmethod
    def probe_once(self, target: str, ttl: int, packet_size_bytes: int) -> ProbeOutput:
        """Send exactly one echo probe for target@ttl. Raises ProbeError."""
        raise NotImplementedError
