# pingtrace/brain/rules.py
from pingtrace.schemas import HopRecord


def destination_confirmed(hop: HopRecord, destination_ip: str) -> bool:
    return destination_ip in hop.addresses


def ceiling_reached(ttl: int, max_hop_count: int) -> bool:
    """True once ttl has moved past the last hop we are allowed to probe."""
    return ttl > max_hop_count


def progress_line(hop: HopRecord) -> str:
    """'<ttl>: a | b' summary of one hop, as printed while tracing."""
    addrs = " | ".join(hop.sorted_addresses()) or "*"
    return f"{hop.ttl}: {addrs}"
