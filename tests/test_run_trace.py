# tests/test_run_trace.py
import json

from pingtrace.errors import ErrorCode
from tools.run_trace import FAKE_DESTINATION, build_argparser, main, params_from_args


def test_fake_run_prints_report(capsys):
    """Test that the dry run prints a successful JSON report with the flat hop fields."""
    rc = main(["fake", "--interval", "0", "--pings-per-hop", "2"])
    assert rc == 0
    report = json.loads(capsys.readouterr().out)
    assert report["success"] is True
    assert report["values"]["num_hops"] == 5
    assert report["values"]["hop_4_addr_1"] == FAKE_DESTINATION
    assert report["values"]["hop_0_addr_1"] == "10.0.1.1"


def test_fake_run_exhausted(capsys):
    """Test that running out of hops exits with the trace-exhausted code and reason."""
    # destination sits at ttl 5 in the fake path; max-hops 3 never reaches it
    rc = main(["fake", "--interval", "0", "--max-hops", "3"])
    assert rc == ErrorCode.TRACE_EXHAUSTED
    out = json.loads(capsys.readouterr().out)
    assert out["success"] is False
    assert out["error"]["kind"] == "trace_exhausted"
    assert out["error"]["stop_reason"] == "max_hops"
    assert out["error"]["hops_explored"] == 3


def test_bad_flag_value_is_config_error(capsys):
    """Test that an invalid flag value exits with the config error code."""
    rc = main(["fake", "--pings-per-hop", "0"])
    assert rc == ErrorCode.CONFIG_ERROR
    assert json.loads(capsys.readouterr().out)["error"]["kind"] == "config"


def test_missing_target_is_config_error(capsys):
    """Test that running without a target exits with the config error code."""
    assert main([]) == ErrorCode.CONFIG_ERROR


def test_nul_byte_target_exits_with_resolution_code(capsys):
    """Test that a target with a NUL byte exits cleanly with the host resolution code."""
    rc = main(["bad\x00host", "--interval", "0"])
    assert rc == ErrorCode.HOST_RESOLUTION_ERROR
    assert json.loads(capsys.readouterr().out)["error"]["kind"] == "host_resolution"


def test_flags_override_config_file(tmp_path):
    """Test that command-line flags win over values from the YAML file."""
    f = tmp_path / "trace.yaml"
    f.write_text("target: example.com\npings_per_hop: 4\nmax_ping_count: 20\n")
    args = build_argparser().parse_args(["--config", str(f), "--pings-per-hop", "2"])
    params = params_from_args(args)
    assert params == {"target": "example.com", "pings_per_hop": 2, "max_ping_count": 20}
