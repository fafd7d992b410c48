"""Tests for HttpTransport and RecordingTransport."""

from __future__ import annotations

import logging

import httpx
import pytest

from epsagon_tracer.errors import TransportError
from epsagon_tracer.transport import HttpTransport, RecordingTransport

PAYLOAD = '{"app_name": "svc", "events": []}'


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestHttpTransportSuccess:
    def test_posts_payload_as_json(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        transport = HttpTransport("http://example/traces", client=_client(handler))
        assert transport.send(PAYLOAD) is True

        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "http://example/traces"
        assert request.headers["content-type"] == "application/json"
        assert request.content.decode() == PAYLOAD

    def test_uses_one_second_timeout(self):
        timeouts = []

        def handler(request: httpx.Request) -> httpx.Response:
            timeouts.append(request.extensions["timeout"])
            return httpx.Response(202)

        HttpTransport("http://example", client=_client(handler)).send(PAYLOAD)
        assert timeouts[0]["read"] == 1.0
        assert timeouts[0]["connect"] == 1.0


class TestHttpTransportFailure:
    def test_server_error_returns_false_and_logs_body(self, caplog):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="collector exploded")

        transport = HttpTransport("http://example", client=_client(handler))
        with caplog.at_level(logging.ERROR):
            assert transport.send(PAYLOAD) is False

        assert "collector exploded" in caplog.text
        assert "500" in caplog.text

    def test_post_raises_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, text="bad token")

        transport = HttpTransport("http://example", client=_client(handler))
        with pytest.raises(TransportError) as excinfo:
            transport.post(PAYLOAD)

        assert excinfo.value.status_code == 403
        assert excinfo.value.body == "bad token"

    def test_network_error_returns_false(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = HttpTransport("http://example", client=_client(handler))
        assert transport.send(PAYLOAD) is False

    def test_timeout_returns_false(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        transport = HttpTransport("http://example", client=_client(handler))
        assert transport.send(PAYLOAD) is False


class TestRecordingTransport:
    def test_records_payloads(self):
        transport = RecordingTransport()
        assert transport.send(PAYLOAD) is True
        assert transport.call_count == 1
        assert transport.traces() == [{"app_name": "svc", "events": []}]

    def test_simulated_failure(self):
        transport = RecordingTransport(succeed=False)
        assert transport.send(PAYLOAD) is False
        assert transport.call_count == 1
