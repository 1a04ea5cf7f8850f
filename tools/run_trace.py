# tools/run_trace.py
# Usage examples:
#   python3 -m tools.run_trace 8.8.8.8
#   python3 -m tools.run_trace 8.8.8.8 --pings-per-hop 3 --max-hops 30 --interval 0.2
#   python3 -m tools.run_trace --config trace.yaml
#   python3 -m tools.run_trace fake

import argparse
import json
import logging
import sys

from pingtrace.brain.controller import TraceController
from pingtrace.config import load_params_file, merge_params, validate
from pingtrace.errors import TraceError
from pingtrace.logsetup import setup_root_logger
from pingtrace.result import to_report

logger = logging.getLogger(__name__)

FAKE_DESTINATION = "192.0.2.1"
FAKE_REACH_TTL = 5


def params_from_args(args) -> dict:
    file_params = load_params_file(args.config) if args.config else {}
    cli_params = {
        "target": args.target,
        "packet_size_byte": args.packet_size,
        "ping_timeout_sec": args.timeout,
        "ping_interval_sec": args.interval,
        "pings_per_hop": args.pings_per_hop,
        "max_ping_count": args.max_hops,
        "ping_exe": args.ping_exe,
    }
    return merge_params(file_params, cli_params)


def run_with_fake(cfg):
    from pingtrace.prober.fake import FakeProber, linear_path_script
    p = FakeProber(script=linear_path_script(FAKE_DESTINATION, FAKE_REACH_TTL, cfg.pings_per_hop))
    ctrl = TraceController(p, resolver=lambda _name: FAKE_DESTINATION)
    return ctrl.run(cfg)


def run_with_ping(cfg):
    from pingtrace.prober.ping import PingProber
    p = PingProber(ping_exe=cfg.ping_exe, timeout_sec=cfg.timeout_sec)
    ctrl = TraceController(p)
    return ctrl.run(cfg)


def build_argparser():
    ap = argparse.ArgumentParser(description="ping-based traceroute runner")
    ap.add_argument("target", nargs="?", help="Destination host/IP (or 'fake' to use FakeProber)")
    ap.add_argument("--config", help="YAML file with trace parameters (flags override it)")
    ap.add_argument("--packet-size", type=int, help="ICMP payload size in bytes [56]")
    ap.add_argument("--timeout", type=int, help="Per-probe deadline in seconds [10]")
    ap.add_argument("--interval", type=float, help="Pause between probes of one hop in seconds [0.5]")
    ap.add_argument("--pings-per-hop", type=int, help="Probes sent per TTL [3]")
    ap.add_argument("--max-hops", type=int, help="Give up after this many TTLs [10]")
    ap.add_argument("--ping-exe", help="Path to the ping binary")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log every line ping prints")
    return ap


def main(argv=None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)
    setup_root_logger(logging.DEBUG if args.verbose else logging.INFO)

    try:
        cfg = validate(params_from_args(args))
        if cfg.target == "fake":
            res = run_with_fake(cfg)
        else:
            res = run_with_ping(cfg)
    except TraceError as e:
        logger.error("%s", e.message)
        print(json.dumps({"success": False, "error": e.as_dict()}, indent=2))
        return int(e.error_code)

    print(json.dumps(to_report(res), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
