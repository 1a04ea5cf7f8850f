# pingtrace/brain/aggregator.py
import logging
import threading
from typing import Optional

from pingtrace.brain.rules import progress_line
from pingtrace.brain.state import HopState
from pingtrace.config import TraceConfig
from pingtrace.errors import ProbeError
from pingtrace.prober.base import Prober
from pingtrace.prober.parser import parse_hop
from pingtrace.schemas import HopRecord

logger = logging.getLogger(__name__)


class HopAggregator:
    """
    Sends pings_per_hop probes at one TTL, one after the other, and folds
    them into a single HopRecord. A failed probe adds no addresses and no
    time but still counts toward the average's denominator.

    ``interrupt`` cuts the pause between two probes short. Setting it does
    not fail the hop; the signal is consumed and the next probe goes out.
    """

    def __init__(self, prober: Prober, interrupt: Optional[threading.Event] = None):
        self.prober = prober
        self.interrupt = interrupt or threading.Event()

    def _pause(self, seconds: float) -> None:
        if seconds <= 0:
            return
        if self.interrupt.wait(seconds):
            logger.info("Sleep interrupted between ping intervals")
            self.interrupt.clear()

    def aggregate_hop(self, ttl: int, config: TraceConfig, destination_ip: str) -> HopRecord:
        hop = HopState(ttl=ttl)

        for i in range(config.pings_per_hop):
            if i > 0:
                self._pause(config.interval_sec)
            hop.attempts += 1
            try:
                out = self.prober.probe_once(config.target, ttl, config.packet_size_bytes)
            except ProbeError as e:
                hop.failures += 1
                logger.warning("probe %d/%d at ttl %d failed: %s",
                               i + 1, config.pings_per_hop, ttl, e.message)
                continue
            hop.addresses |= parse_hop(out.lines, destination_ip)
            hop.elapsed_total_ms += out.elapsed_ms

        record = hop.to_record(config.pings_per_hop)
        logger.info("%s", progress_line(record))
        if hop.failures:
            logger.debug("ttl %d: %d of %d probes failed", ttl, hop.failures, hop.attempts)
        return record
