# pingtrace/errors.py
"""
Error taxonomy for a trace.

Fatal errors derive from TraceError and carry a ``kind`` and an exit code so
the caller can tell them apart without string matching. ProbeError is the one
recoverable error: the hop aggregator swallows it after logging.
"""
from enum import IntEnum
from typing import Optional


class ErrorCode(IntEnum):
    SUCCESS = 0
    TRACE_EXHAUSTED = 1
    CONFIG_ERROR = 10
    HOST_RESOLUTION_ERROR = 12
    INTERNAL_ERROR = 15


class TraceError(Exception):
    """Base class for every error that ends a trace unsuccessfully."""

    kind = "internal"
    error_code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, target: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.target = target

    def as_dict(self) -> dict:
        return {
            "kind": self.kind,
            "code": int(self.error_code),
            "message": self.message,
            "target": self.target,
        }


class ConfigError(TraceError):
    """Raised when trace parameters are missing or do not parse."""

    kind = "config"
    error_code = ErrorCode.CONFIG_ERROR

    def __init__(self, message: str, key: Optional[str] = None, target: Optional[str] = None):
        super().__init__(message, target=target)
        self.key = key


class HostResolutionError(TraceError):
    kind = "host_resolution"
    error_code = ErrorCode.HOST_RESOLUTION_ERROR


class TraceExhaustedError(TraceError):
    """Raised when the hop ceiling is hit before the destination answered."""

    kind = "trace_exhausted"
    error_code = ErrorCode.TRACE_EXHAUSTED

    def __init__(self, message: str, target: Optional[str] = None, hops_explored: int = 0,
                 stop_reason: str = "max_hops"):
        super().__init__(message, target=target)
        self.hops_explored = hops_explored
        self.stop_reason = stop_reason

    def as_dict(self) -> dict:
        d = super().as_dict()
        d["hops_explored"] = self.hops_explored
        d["stop_reason"] = self.stop_reason
        return d


class ProbeError(Exception):
    """One ping invocation failed. Recoverable: the hop goes on without it."""

    def __init__(self, message: str, ttl: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.ttl = ttl
