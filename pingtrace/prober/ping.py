# pingtrace/prober/ping.py
import logging
import sys
import time
from typing import Optional

from pingtrace.config import DEFAULT_PING_EXE
from pingtrace.errors import ProbeError
from pingtrace.prober.base import Prober, ProcessRunner
from pingtrace.prober.process import SubprocessRunner
from pingtrace.schemas import ProbeOutput

logger = logging.getLogger(__name__)


def ping_ttl_flag(platform: str = sys.platform) -> str:
    # iputils / toybox (Linux, Android) use -t for TTL; BSD and macOS use -m
    if platform.startswith(("darwin", "freebsd", "openbsd", "netbsd")):
        return "-m"
    return "-t"


class PingProber(Prober):
    """
    Wraps the system ping binary: one process per probe, one echo request
    per process, no name resolution. The elapsed time covers starting the
    process as well as reading all of its output, so it includes process
    overhead on top of the network round trip.
    """

    def __init__(self,
                 ping_exe: str = DEFAULT_PING_EXE,
                 runner: Optional[ProcessRunner] = None,
                 timeout_sec: Optional[float] = None,
                 platform: str = sys.platform):
        self.ping = ping_exe
        self.runner = runner or SubprocessRunner()
        self.timeout_sec = timeout_sec
        self.ttl_flag = ping_ttl_flag(platform)

    def build_cmd(self, target: str, ttl: int, packet_size_bytes: int) -> list[str]:
        return [self.ping, "-n", self.ttl_flag, str(ttl),
                "-s", str(packet_size_bytes), "-c", "1", target]

    def probe_once(self, target: str, ttl: int, packet_size_bytes: int) -> ProbeOutput:
        cmd = self.build_cmd(target, ttl, packet_size_bytes)
        lines: list[str] = []
        t0 = time.perf_counter()
        try:
            with self.runner.running(cmd, timeout_sec=self.timeout_sec) as handle:
                for line in self.runner.read_lines(handle):
                    logger.debug("%s", line)
                    lines.append(line)
                elapsed_ms = (time.perf_counter() - t0) * 1000.0
                if self.runner.timed_out(handle):
                    raise ProbeError(
                        f"ping to {target} at ttl {ttl} exceeded {self.timeout_sec}s", ttl=ttl)
        except PermissionError as e:
            raise ProbeError(f"no permission to run {self.ping}: {e}", ttl=ttl) from e
        except FileNotFoundError as e:
            raise ProbeError(f"ping binary {self.ping} not found: {e}", ttl=ttl) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ProbeError(f"ping program cannot be executed: {e}", ttl=ttl) from e

        return ProbeOutput(lines=tuple(lines), elapsed_ms=elapsed_ms)
