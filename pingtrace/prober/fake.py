# pingtrace/prober/fake.py
from collections import deque
from typing import Any, Iterator, Sequence

from pingtrace.prober.base import Prober, ProcessRunner
from pingtrace.schemas import ProbeOutput


def _as_output(item: Any) -> ProbeOutput:
    if isinstance(item, BaseException):
        raise item
    if isinstance(item, ProbeOutput):
        return item
    if isinstance(item, str):
        return ProbeOutput(lines=tuple(item.splitlines()), elapsed_ms=0.0)
    lines, elapsed_ms = item
    return ProbeOutput(lines=tuple(lines), elapsed_ms=float(elapsed_ms))


class FakeProber(Prober):
    """
    script: dict[ttl] -> list of things to return, one per call:
      ProbeOutput, (lines, elapsed_ms), a raw output string, or an exception
      instance to raise.
    If nothing is scripted for a call, the probe times out silently (no lines).
    """
    def __init__(self, script=None, default_elapsed_ms: float = 0.0):
        self.script = {}
        self.default_elapsed_ms = default_elapsed_ms
        self.calls: list[tuple[str, int, int]] = []
        if script:
            for k, v in script.items():
                self.script[k] = deque(v)

    def probe_once(self, target: str, ttl: int, packet_size_bytes: int) -> ProbeOutput:
        self.calls.append((target, ttl, packet_size_bytes))
        dq = self.script.get(ttl)
        if dq and len(dq) > 0:
            return _as_output(dq.popleft())
        return ProbeOutput(lines=(), elapsed_ms=self.default_elapsed_ms)


def linear_path_script(destination_ip: str, reach_ttl: int, pings_per_hop: int = 3,
                       elapsed_ms: float = 10.0) -> dict[int, list]:
    """
    Script for a path of routers 10.0.<ttl>.1 that reaches destination_ip at
    reach_ttl. Used by the dry-run tool and the tests.
    """
    script: dict[int, list] = {}
    for ttl in range(1, reach_ttl):
        line = f"From 10.0.{ttl}.1 icmp_seq=1 Time to live exceeded"
        script[ttl] = [([line], elapsed_ms + ttl)] * pings_per_hop
    reply = (f"64 bytes from {destination_ip}: icmp_seq=1 ttl=57 "
             f"time={elapsed_ms + reach_ttl:.1f} ms")
    script[reach_ttl] = [([reply], elapsed_ms + reach_ttl)] * pings_per_hop
    return script


class FakeHandle:
    def __init__(self, command, lines, fail_after=None, timed_out=False):
        self.command = list(command)
        self.lines = list(lines)
        self.fail_after = fail_after
        self.timed_out = timed_out
        self.closed = 0


class FakeProcessRunner(ProcessRunner):
    """
    Scripted stand-in for SubprocessRunner.

    outputs: list consumed one per spawn. Each entry is either an exception
    instance (raised from spawn) or a dict with ``lines`` and optionally
    ``fail_after`` (raise OSError after that many lines) and ``timed_out``.
    """
    def __init__(self, outputs=None):
        self.outputs = deque(outputs or [])
        self.handles: list[FakeHandle] = []
        self.commands: list[list[str]] = []

    def spawn(self, command: Sequence[str], timeout_sec: float | None = None) -> FakeHandle:
        self.commands.append(list(command))
        item = self.outputs.popleft() if self.outputs else {"lines": []}
        if isinstance(item, BaseException):
            raise item
        handle = FakeHandle(command, item.get("lines", []),
                            fail_after=item.get("fail_after"),
                            timed_out=item.get("timed_out", False))
        self.handles.append(handle)
        return handle

    def read_lines(self, handle: FakeHandle) -> Iterator[str]:
        for i, line in enumerate(handle.lines):
            if handle.fail_after is not None and i >= handle.fail_after:
                raise OSError("broken pipe while reading ping output")
            yield line
        if handle.fail_after is not None and handle.fail_after >= len(handle.lines):
            raise OSError("broken pipe while reading ping output")

    def timed_out(self, handle: FakeHandle) -> bool:
        return handle.timed_out

    def close(self, handle: FakeHandle) -> None:
        handle.closed += 1
