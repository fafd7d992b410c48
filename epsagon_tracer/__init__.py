"""epsagon_tracer — in-process trace collector that ships one trace on stop.

Usage::

    import epsagon_tracer

    epsagon_tracer.create_tracer(epsagon_tracer.Config(application_name="svc"))
    epsagon_tracer.add_event(epsagon_tracer.Event(origin="runner"))
    epsagon_tracer.stop_tracer()   # blocks until the trace was POSTed
"""

from __future__ import annotations

from dotenv import load_dotenv

load_dotenv()  # reads .env into os.environ (no-op if file missing)

from epsagon_tracer.config import Config, fill_config_defaults
from epsagon_tracer.engine.registry import (
    add_event,
    add_exception,
    astop_tracer,
    create_tracer,
    get_tracer,
    stop_tracer,
)
from epsagon_tracer.engine.tracer import Tracer, TracerState
from epsagon_tracer.errors import SerializationError, TracerError, TransportError
from epsagon_tracer.models import TRACER_VERSION, ErrorCode, Event, Resource, Trace, TraceException

__version__ = TRACER_VERSION

__all__ = [
    "Config",
    "ErrorCode",
    "Event",
    "Resource",
    "SerializationError",
    "Trace",
    "TraceException",
    "Tracer",
    "TracerError",
    "TracerState",
    "TransportError",
    "add_event",
    "add_exception",
    "astop_tracer",
    "create_tracer",
    "fill_config_defaults",
    "get_tracer",
    "stop_tracer",
]
