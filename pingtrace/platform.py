# pingtrace/platform.py
"""
Host services the tracer leans on but does not own: name resolution and
keeping the device awake for the length of a trace.
"""
import logging
import socket
from abc import ABC, abstractmethod

from pingtrace.errors import HostResolutionError

logger = logging.getLogger(__name__)


def resolve_host(name: str) -> str:
    """Resolve a hostname (or pass through an IPv4 literal) to an IPv4 string."""
    try:
        return socket.gethostbyname(name)
    except (OSError, TypeError, ValueError) as e:
        # NUL bytes and malformed IDNA names raise TypeError/ValueError
        logger.error("Cannot resolve host %s", name)
        raise HostResolutionError(f"target {name} cannot be resolved: {e}", target=name) from e


class KeepAwake(ABC):
    @abstractmethod
    def acquire(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def release(self) -> None:
        raise NotImplementedError


class NullKeepAwake(KeepAwake):
    """For hosts with nothing to hold awake (servers, CI)."""

    def acquire(self) -> None:
        logger.debug("keep-awake acquired (no-op)")

    def release(self) -> None:
        logger.debug("keep-awake released (no-op)")
