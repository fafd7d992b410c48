"""Tests for the JSON-lines CLI adapter."""

from __future__ import annotations

import io
import json
import sys

import epsagon_tracer
from epsagon_tracer import Config
from epsagon_tracer.adapters.cli.main import USAGE, main, run_cli
from epsagon_tracer.transport.recording import RecordingTransport


class TestRunCli:
    def test_records_shipped_as_one_trace(self):
        lines = io.StringIO("\n".join([
            json.dumps({"event": {"id": "e1", "origin": "cron", "error_code": 1}}),
            json.dumps({"exception": {"type": "ValueError", "message": "bad"}}),
            json.dumps({"event": {"id": "e2"}}),
            "",
        ]))
        transport = RecordingTransport()

        counts = run_cli(lines, application_name="batch", transport=transport)

        assert counts == (2, 1)
        assert transport.call_count == 1
        trace = transport.traces()[0]
        assert trace["app_name"] == "batch"
        assert [e["id"] for e in trace["events"]] == ["e1", "e2"]
        assert trace["events"][0]["error_code"] == 1
        assert trace["exceptions"][0]["type"] == "ValueError"

    def test_malformed_lines_skipped(self, caplog):
        lines = io.StringIO("\n".join([
            "not json",
            json.dumps({"event": {"duration": "slow"}}),
            json.dumps({"span": {}}),
            json.dumps(42),
            json.dumps({"event": {"id": "ok"}}),
        ]))
        transport = RecordingTransport()

        counts = run_cli(lines, transport=transport)

        assert counts == (1, 0)
        assert [e["id"] for e in transport.traces()[0]["events"]] == ["ok"]
        assert "line 1" in caplog.text
        assert "line 3" in caplog.text

    def test_active_process_tracer_left_alone(self):
        host_transport = RecordingTransport()
        host = epsagon_tracer.create_tracer(Config(application_name="host"), transport=host_transport)
        cli_transport = RecordingTransport()

        counts = run_cli(
            io.StringIO(json.dumps({"event": {"id": "c1"}})),
            application_name="batch",
            transport=cli_transport,
        )

        assert counts == (1, 0)
        assert not host.stopped()
        assert host.events == ()
        assert host_transport.call_count == 0
        trace = cli_transport.traces()[0]
        assert trace["app_name"] == "batch"
        assert [e["id"] for e in trace["events"]] == ["c1"]


class TestMain:
    def test_help(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["epsagon-trace", "--help"])
        main()
        assert USAGE in capsys.readouterr().out
