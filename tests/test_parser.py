# tests/test_parser.py
import pytest

from pingtrace.prober.parser import extract_reply_ip, is_valid_ipv4, parse_hop

DEST = "93.184.216.34"

TTL_EXCEEDED = """\
PING 93.184.216.34 (93.184.216.34) 56(84) bytes of data.
From 10.0.0.1 icmp_seq=1 Time to live exceeded

--- 93.184.216.34 ping statistics ---
1 packets transmitted, 0 received, +1 errors, 100% packet loss, time 0ms
""".splitlines()

ECHO_REPLY = """\
PING 93.184.216.34 (93.184.216.34) 56(84) bytes of data.
64 bytes from 93.184.216.34: icmp_seq=1 ttl=57 time=11.8 ms

--- 93.184.216.34 ping statistics ---
1 packets transmitted, 1 received, 0% packet loss, time 0ms
rtt min/avg/max/mdev = 11.812/11.812/11.812/0.000 ms
""".splitlines()


@pytest.mark.parametrize("text,ok", [
    ("192.168.1.1", True),
    ("0.0.0.0", True),
    ("255.255.255.255", True),
    ("999.1.1.1", False),
    ("1.2.3", False),
    ("10.0.0.256", False),
    ("1.2.3.4.5", False),
    ("a.b.c.d", False),
    ("1..2.3", False),
    ("-1.2.3.4", False),
    ("", False),
])
def test_is_valid_ipv4(text, ok):
    """Test IPv4 validation: four decimal octets, each 0-255."""
    assert is_valid_ipv4(text) is ok


def test_ttl_exceeded_yields_router():
    """Test that a time-to-live-exceeded reply yields the router address."""
    assert parse_hop(TTL_EXCEEDED, DEST) == {"10.0.0.1"}


def test_echo_reply_yields_destination():
    """Test that an echo reply line with time= yields the destination."""
    assert parse_hop(ECHO_REPLY, DEST) == {DEST}


def test_colon_after_address():
    """Test that a colon after the address does not hide it."""
    lines = ["From 172.16.4.1: icmp_seq=1 Time to live exceeded"]
    assert parse_hop(lines, DEST) == {"172.16.4.1"}


def test_address_not_in_first_position():
    """Test that the address is found further along when the first token is a name."""
    lines = ["From gw.example.net (10.20.30.40) icmp_seq=1 Time to live exceeded"]
    assert extract_reply_ip(lines[0]) == "10.20.30.40"
    assert parse_hop(lines, DEST) == {"10.20.30.40"}


def test_reply_from_destination_is_not_a_router():
    """Test that a From-line naming the destination adds nothing."""
    lines = [f"From {DEST} icmp_seq=1 Destination Host Unreachable"]
    assert parse_hop(lines, DEST) == set()


def test_from_line_without_address():
    """Test that a From-line with no IPv4 token adds nothing."""
    assert extract_reply_ip("From") is None
    assert parse_hop(["From nowhere icmp_seq=1 Time to live exceeded"], DEST) == set()


def test_silent_probe_is_empty():
    """Test that a probe with no reply yields an empty set."""
    lines = [
        "PING 93.184.216.34 (93.184.216.34) 56(84) bytes of data.",
        "",
        "--- 93.184.216.34 ping statistics ---",
        "1 packets transmitted, 0 received, 100% packet loss, time 0ms",
    ]
    assert parse_hop(lines, DEST) == set()


def test_parsing_is_deterministic():
    """Test that the same output always parses to the same set."""
    lines = TTL_EXCEEDED + ECHO_REPLY
    first = parse_hop(lines, DEST)
    assert first == parse_hop(list(lines), DEST)
    assert first == {"10.0.0.1", DEST}


def test_accepts_one_shot_iterator():
    """Test that a single-pass iterator of lines is accepted."""
    assert parse_hop(iter(TTL_EXCEEDED), DEST) == {"10.0.0.1"}
