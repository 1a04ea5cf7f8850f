# pingtrace/brain/controller.py

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Optional

from pingtrace.brain.aggregator import HopAggregator
from pingtrace.brain.rules import ceiling_reached, destination_confirmed
from pingtrace.brain.state import (
    PROBING, STOP_DEST_REACHED, STOP_MAX_HOPS, STOP_UNRESOLVED, TraceState,
)
from pingtrace.config import TraceConfig
from pingtrace.errors import HostResolutionError, TraceExhaustedError
from pingtrace.platform import KeepAwake, NullKeepAwake, resolve_host
from pingtrace.prober.base import Prober
from pingtrace.schemas import TraceResult

logger = logging.getLogger(__name__)


class TraceController:
    def __init__(self,
                 prober: Prober,
                 resolver: Callable[[str], str] = resolve_host,
                 keep_awake: Optional[KeepAwake] = None,
                 interrupt: Optional[threading.Event] = None):
        self.prober = prober
        self.resolver = resolver
        self.keep_awake = keep_awake or NullKeepAwake()
        self.aggregator = HopAggregator(prober, interrupt=interrupt)
        self.state: Optional[TraceState] = None

    def _resolve(self, target: str) -> str:
        try:
            ip = self.resolver(target)
        except HostResolutionError:
            raise
        except (OSError, TypeError, ValueError) as e:
            raise HostResolutionError(f"target {target} cannot be resolved: {e}", target=target) from e
        if not ip:
            raise HostResolutionError(f"target {target} cannot be resolved", target=target)
        return ip

    def run(self, config: TraceConfig) -> TraceResult:
        """
        Probe TTL 1, 2, ... until the destination answers or max_hop_count
        hops have been tried. Returns a TraceResult only on success; running
        out of hops raises TraceExhaustedError and the partial path is dropped.
        The bookkeeping of the latest run stays on ``self.state``.
        """
        logger.info("Starting traceroute on host %s", config.target)
        run = TraceState(max_hop_count=config.max_hop_count)
        self.state = run

        self.keep_awake.acquire()
        try:
            # -------------------------------
            # 1) INIT: resolve the target
            # -------------------------------
            try:
                run.destination_ip = self._resolve(config.target)
            except HostResolutionError:
                run.finish(STOP_UNRESOLVED)
                raise
            run.phase = PROBING

            # -------------------------------
            # 2) PROBING(ttl)
            # -------------------------------
            while not ceiling_reached(run.ttl, run.max_hop_count):
                ttl = run.ttl
                hop = self.aggregator.aggregate_hop(ttl, config, run.destination_ip)

                if destination_confirmed(hop, run.destination_ip):
                    run.hops.append(hop)
                    run.finish(STOP_DEST_REACHED)
                    logger.info("Finished! %s reached in %d hops (%s)",
                                config.target, ttl, run.stop_reason)
                    return TraceResult.reached(
                        run.hops,
                        target=config.target,
                        destination_ip=run.destination_ip,
                        timestamp=datetime.now(timezone.utc).isoformat(),
                    )

                run.advance(hop)

            # -------------------------------
            # 3) DONE(failure): out of hops
            # -------------------------------
            run.finish(STOP_MAX_HOPS)
            explored = len(run.hops)
            # partial paths never leave the controller, not even via self.state
            run.hops.clear()
            raise TraceExhaustedError(
                f"cannot perform traceroute to {config.target}: "
                f"not reached within {config.max_hop_count} hops",
                target=config.target,
                hops_explored=explored,
                stop_reason=run.stop_reason,
            )
        finally:
            self.keep_awake.release()
