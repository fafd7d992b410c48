"""Tracer — buffers events/exceptions on a worker thread and flushes once on stop."""

from __future__ import annotations

import asyncio
import enum
import logging
import queue
import threading
from dataclasses import dataclass, field
from typing import Any

from epsagon_tracer.config import Config
from epsagon_tracer.errors import SerializationError
from epsagon_tracer.models import Event, TraceException
from epsagon_tracer.serialization.serializer import TraceSerializer
from epsagon_tracer.transport.http import HttpTransport
from epsagon_tracer.transport.interface import Transport

logger = logging.getLogger(__name__)


class TracerState(str, enum.Enum):
    CREATED = "created"
    RUNNING = "running"
    STOPPED = "stopped"


class _Kind(enum.Enum):
    EVENT = "event"
    EXCEPTION = "exception"
    STOP = "stop"


@dataclass
class _Message:
    """One inbox entry. ``done`` is set once the worker has handled it."""

    kind: _Kind
    payload: Any = None
    accepted: bool = False
    done: threading.Event = field(default_factory=threading.Event)


class Tracer:
    """Single-consumer trace buffer.

    Public API::

        tracer = Tracer(config)
        tracer.start()
        tracer.add_event(event)        # blocks until the worker took it
        tracer.stop()                  # blocks until the trace was sent

    All buffer mutations happen on the worker thread. Producers hand values
    over through one FIFO inbox, so the flush sees everything that was
    enqueued before the stop command and nothing after it.
    """

    def __init__(
        self,
        config: Config,
        transport: Transport | None = None,
        serializer: TraceSerializer | None = None,
    ) -> None:
        self.config = config
        self._transport = transport or HttpTransport(config.collector_url)
        self._serializer = serializer or TraceSerializer()

        self._events: list[Event] = []
        self._exceptions: list[TraceException] = []

        self._inbox: queue.Queue[_Message] = queue.Queue()
        # Guards state transitions and the check-then-enqueue in producers
        self._lock = threading.Lock()
        self._state = TracerState.CREATED
        self._stop_requested = False
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> TracerState:
        return self._state

    def running(self) -> bool:
        return self._state is TracerState.RUNNING

    def stopped(self) -> bool:
        return self._stopped.is_set()

    def start(self) -> None:
        """Launch the worker thread. Returns without waiting for it to run."""
        with self._lock:
            if self._thread is not None or self._state is TracerState.STOPPED:
                return
            self._thread = threading.Thread(
                target=self.run, name="epsagon-tracer", daemon=True,
            )
        self._thread.start()

    def stop(self) -> None:
        """Flush the buffers and stop. Safe to call repeatedly and concurrently."""
        with self._lock:
            if self._state is TracerState.STOPPED:
                return
            never_started = self._thread is None and self._state is TracerState.CREATED
            if never_started:
                self._state = TracerState.STOPPED
                self._stop_requested = True
            elif not self._stop_requested:
                self._stop_requested = True
                self._inbox.put(_Message(_Kind.STOP))
        if never_started:
            logger.warning("Epsagon: stopping a tracer that was never started, nothing sent")
            self._finish()
            return
        self._stopped.wait()

    async def astop(self) -> None:
        """``stop()`` for asyncio callers; the flush runs off the event loop."""
        await asyncio.to_thread(self.stop)

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def add_event(self, event: Event) -> bool:
        """Hand *event* to the worker. Returns whether it was recorded."""
        accepted = self._handoff(_Kind.EVENT, event)
        if accepted and self.config.debug:
            logger.debug("EPSAGON DEBUG: Adding event: %s", event)
        return accepted

    def add_exception(self, exception: TraceException) -> bool:
        return self._handoff(_Kind.EXCEPTION, exception)

    def _handoff(self, kind: _Kind, payload: Any) -> bool:
        with self._lock:
            if self._stop_requested or self._state is TracerState.STOPPED:
                logger.warning("Epsagon: the tracer is stopped, dropping %s", kind.value)
                return False
            if self._thread is None and self._state is TracerState.CREATED:
                logger.warning("Epsagon: the tracer was never started, dropping %s", kind.value)
                return False
            msg = _Message(kind, payload)
            self._inbox.put(msg)
        msg.done.wait()
        if not msg.accepted:
            logger.warning("Epsagon: the tracer stopped before the %s was recorded", kind.value)
        return msg.accepted

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def events(self) -> tuple[Event, ...]:
        return tuple(self._events)

    @property
    def exceptions(self) -> tuple[TraceException, ...]:
        return tuple(self._exceptions)

    # ------------------------------------------------------------------
    # Worker
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Worker loop. Runs until a stop command arrives, then flushes once."""
        with self._lock:
            if self._state is not TracerState.CREATED:
                return
            self._state = TracerState.RUNNING
        if self.config.debug:
            logger.debug("EPSAGON DEBUG: tracer started running")

        try:
            while True:
                msg = self._inbox.get()
                if msg.kind is _Kind.STOP:
                    break
                if msg.kind is _Kind.EVENT:
                    self._events.append(msg.payload)
                else:
                    self._exceptions.append(msg.payload)
                msg.accepted = True
                msg.done.set()

            if self.config.debug:
                logger.debug("EPSAGON DEBUG: tracer stops running, sending traces")
            if self._send_traces() and self.config.debug:
                logger.debug("EPSAGON DEBUG: traces sent to %s", self.config.collector_url)
        finally:
            self._finish()

    def _send_traces(self) -> bool:
        """Serialize and send what was buffered. Failures are logged, data is dropped."""
        try:
            payload = self._serializer.serialize(
                self.config.application_name,
                self.config.token,
                self._events,
                self._exceptions,
            )
        except SerializationError as exc:
            logger.error("Epsagon: Encountered an error while marshaling the traces: %s", exc)
            return False
        except Exception:
            logger.exception("Epsagon: serializer raised while marshaling the traces")
            return False

        if self.config.debug:
            logger.debug("EPSAGON DEBUG: Final Traces: %s", payload)

        try:
            sent = self._transport.send(payload)
        except Exception:
            logger.exception("Epsagon: transport raised while sending traces")
            sent = False
        if not sent:
            logger.error(
                "Epsagon: failed to send traces, dropping %d events and %d exceptions",
                len(self._events), len(self._exceptions),
            )
            return False
        return True

    def _finish(self) -> None:
        with self._lock:
            self._state = TracerState.STOPPED
            self._stop_requested = True
        # Release anyone still blocked on a handoff the worker never reached
        while True:
            try:
                msg = self._inbox.get_nowait()
            except queue.Empty:
                break
            msg.done.set()
        self._stopped.set()
