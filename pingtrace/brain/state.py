# pingtrace/brain/state.py
from dataclasses import dataclass, field

from pingtrace.schemas import HopRecord

INIT = "init"
PROBING = "probing"
DONE = "done"

STOP_DEST_REACHED = "dest_reached"
STOP_MAX_HOPS = "max_hops"
STOP_UNRESOLVED = "unresolved"


@dataclass
class HopState:
    ttl: int
    addresses: set = field(default_factory=set)
    elapsed_total_ms: float = 0.0
    attempts: int = 0
    failures: int = 0

    def to_record(self, pings_per_hop: int) -> HopRecord:
        # denominator is the configured count, failed probes included
        return HopRecord(
            ttl=self.ttl,
            addresses=frozenset(self.addresses),
            average_rtt_ms=self.elapsed_total_ms / pings_per_hop,
        )


@dataclass
class TraceState:
    max_hop_count: int
    phase: str = INIT
    ttl: int = 1
    destination_ip: str | None = None
    stop_reason: str | None = None
    hops: list = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.stop_reason == STOP_DEST_REACHED

    def advance(self, hop: HopRecord) -> None:
        self.hops.append(hop)
        self.ttl += 1

    def finish(self, stop_reason: str) -> None:
        self.phase = DONE
        self.stop_reason = stop_reason
