# tests/conftest.py
import pytest

from pingtrace.config import TraceConfig
from pingtrace.platform import KeepAwake

DEST = "93.184.216.34"


class RecordingKeepAwake(KeepAwake):
    def __init__(self):
        self.events = []

    def acquire(self):
        self.events.append("acquire")

    def release(self):
        self.events.append("release")


@pytest.fixture
def keep_awake():
    return RecordingKeepAwake()


@pytest.fixture
def cfg():
    return TraceConfig(target="example.com", interval_sec=0, pings_per_hop=3, max_hop_count=10)


def fixed_resolver(ip=DEST):
    return lambda _name: ip
