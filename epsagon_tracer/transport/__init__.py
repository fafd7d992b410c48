from epsagon_tracer.transport.interface import Transport
from epsagon_tracer.transport.http import HttpTransport
from epsagon_tracer.transport.recording import RecordingTransport

__all__ = ["HttpTransport", "RecordingTransport", "Transport"]
