"""Shared fixtures for epsagon_tracer tests."""

from __future__ import annotations

import pytest

from epsagon_tracer import Config
from epsagon_tracer.engine import registry
from epsagon_tracer.engine.tracer import Tracer
from epsagon_tracer.transport.recording import RecordingTransport


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("EPSAGON_TOKEN", "EPSAGON_DEBUG", "AWS_REGION"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_global_tracer(monkeypatch):
    monkeypatch.setattr(registry, "_tracer", None)
    yield
    leftover = registry.get_tracer()
    if leftover is not None:
        leftover.stop()


@pytest.fixture
def config():
    return Config(application_name="svc", token="t1", collector_url="http://example")


@pytest.fixture
def recording_transport():
    return RecordingTransport()


@pytest.fixture
def tracer(config, recording_transport):
    t = Tracer(config, transport=recording_transport)
    t.start()
    yield t
    t.stop()
