"""Process-wide default tracer and the free functions that delegate to it."""

from __future__ import annotations

import logging
import threading

from epsagon_tracer.config import Config, fill_config_defaults
from epsagon_tracer.engine.tracer import Tracer
from epsagon_tracer.models import Event, TraceException
from epsagon_tracer.serialization.serializer import TraceSerializer
from epsagon_tracer.transport.interface import Transport

logger = logging.getLogger(__name__)

_lock = threading.Lock()
# Not cleared on stop; a stopped tracer stays here until the next create_tracer()
_tracer: Tracer | None = None


def get_tracer() -> Tracer | None:
    return _tracer


def create_tracer(
    config: Config | None = None,
    *,
    transport: Transport | None = None,
    serializer: TraceSerializer | None = None,
) -> Tracer:
    """Create, publish and start the process-wide tracer.

    If a tracer is already active (not stopped) it is left untouched and
    returned instead.
    """
    global _tracer

    with _lock:
        if _tracer is not None and not _tracer.stopped():
            logger.warning("Epsagon: the tracer is already created")
            return _tracer

        resolved = fill_config_defaults(config or Config())
        tracer = Tracer(resolved, transport=transport, serializer=serializer)
        _tracer = tracer
        if resolved.debug:
            logger.debug("EPSAGON DEBUG: Created a new tracer")
        tracer.start()
        return tracer


def _active_tracer() -> Tracer | None:
    tracer = _tracer
    if tracer is None or tracer.stopped():
        logger.warning("Epsagon: the tracer is not initialized!")
        return None
    return tracer


def add_event(event: Event) -> None:
    """Add an event to the active tracer, or log and drop it."""
    tracer = _active_tracer()
    if tracer is not None:
        tracer.add_event(event)


def add_exception(exception: TraceException) -> None:
    """Add an exception to the active tracer, or log and drop it."""
    tracer = _active_tracer()
    if tracer is not None:
        tracer.add_exception(exception)


def stop_tracer() -> None:
    """Stop the active tracer and send everything it collected."""
    tracer = _active_tracer()
    if tracer is not None:
        tracer.stop()


async def astop_tracer() -> None:
    """``stop_tracer()`` for asyncio callers; the flush runs off the event loop."""
    tracer = _active_tracer()
    if tracer is not None:
        await tracer.astop()
