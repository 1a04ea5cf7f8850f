# pingtrace/prober/parser.py
"""
Pulls router addresses out of ping's text output.

With a small TTL ping does not get an echo reply; the router where the TTL
ran out answers instead and ping prints a line starting with "From", e.g.

    From 10.0.0.1 icmp_seq=1 Time to live exceeded
    From 10.0.0.1: icmp_seq=1 Time to live exceeded
    From gw.example.net (10.0.0.1) icmp_seq=1 Time to live exceeded

When the TTL is large enough the target answers and ping prints a line with
"time=", which is taken as the destination itself responding.
"""
from typing import Iterable, Optional

REPLY_FROM_MARKER = "From"
RTT_MARKER = "time="


def is_valid_ipv4(text: str) -> bool:
    parts = text.split(".")
    if len(parts) != 4:
        return False
    for p in parts:
        if not p.isdigit() or not p.isascii():
            return False
        if int(p) > 255:
            return False
    return True


def _clean(token: str) -> str:
    # "10.0.0.1:" and "(10.0.0.1)" both show up depending on ping version
    return token.strip("():,")


def extract_reply_ip(line: str) -> Optional[str]:
    """
    The token right after the marker is the usual spot for the address; if
    that one is not an IPv4 address scan the rest, left to right.
    """
    tokens = line.split()[1:]
    if not tokens:
        return None
    first = _clean(tokens[0])
    if is_valid_ipv4(first):
        return first
    for tok in tokens[1:]:
        tok = _clean(tok)
        if is_valid_ipv4(tok):
            return tok
    return None


def parse_hop(lines: Iterable[str], destination_ip: str) -> set[str]:
    found: set[str] = set()
    for line in lines:
        if line.startswith(REPLY_FROM_MARKER):
            ip = extract_reply_ip(line)
            if ip is not None and ip != destination_ip:
                found.add(ip)
        elif RTT_MARKER in line:
            found.add(destination_ip)
    return found
