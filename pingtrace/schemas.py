# pingtrace/schemas.py
from dataclasses import dataclass, field
from typing import Iterable


@dataclass(frozen=True)
class ProbeOutput:
    """Raw stdout lines of one ping run and the wall-clock time it took."""
    lines: tuple[str, ...]
    elapsed_ms: float


@dataclass(frozen=True)
class HopRecord:
    ttl: int
    addresses: frozenset[str] = field(default_factory=frozenset)
    average_rtt_ms: float = 0.0

    def sorted_addresses(self) -> list[str]:
        # set order is arbitrary; reports need a stable one
        return sorted(self.addresses)


@dataclass(frozen=True)
class TraceResult:
    success: bool
    hop_count: int
    hops: tuple[HopRecord, ...]
    target: str = ""
    destination_ip: str = ""
    timestamp: str = ""

    @classmethod
    def reached(cls, hops: Iterable[HopRecord], target: str,
                destination_ip: str, timestamp: str) -> "TraceResult":
        hops = tuple(hops)
        return cls(
            success=True,
            hop_count=len(hops),
            hops=hops,
            target=target,
            destination_ip=destination_ip,
            timestamp=timestamp,
        )
