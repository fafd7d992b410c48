from epsagon_tracer.engine.tracer import Tracer, TracerState
from epsagon_tracer.engine.registry import (
    add_event,
    add_exception,
    astop_tracer,
    create_tracer,
    get_tracer,
    stop_tracer,
)

__all__ = [
    "Tracer",
    "TracerState",
    "add_event",
    "add_exception",
    "astop_tracer",
    "create_tracer",
    "get_tracer",
    "stop_tracer",
]
