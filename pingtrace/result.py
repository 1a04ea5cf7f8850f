# pingtrace/result.py
"""
Flattens a TraceResult into the ordered key/value list the measurement
report carries:

    num_hops          number of hops to the destination
    hop_<i>_addr_<j>  j-th address (1-based) seen at hop i (0-based)
    hop_<i>_rrt_ms    average time at hop i, three decimals, as a string

The field names (including the "rrt" spelling) are what downstream readers
key on, so they must not change.
"""
from typing import Any

from pingtrace.schemas import TraceResult


def build(result: TraceResult) -> list[tuple[str, Any]]:
    fields: list[tuple[str, Any]] = [("num_hops", result.hop_count)]
    for i, hop in enumerate(result.hops):
        for j, addr in enumerate(hop.sorted_addresses(), start=1):
            fields.append((f"hop_{i}_addr_{j}", addr))
        fields.append((f"hop_{i}_rrt_ms", f"{hop.average_rtt_ms:.3f}"))
    return fields


def to_dict(result: TraceResult) -> dict[str, Any]:
    return dict(build(result))


def to_report(result: TraceResult) -> dict[str, Any]:
    """Measurement envelope around the field list, as the CLI prints it."""
    return {
        "type": "traceroute",
        "target": result.target,
        "destination_ip": result.destination_ip,
        "timestamp": result.timestamp,
        "success": result.success,
        "values": to_dict(result),
    }
