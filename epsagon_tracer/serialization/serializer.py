"""Builds the JSON trace payload sent to the collector."""

from __future__ import annotations

from typing import Sequence

from epsagon_tracer.errors import SerializationError
from epsagon_tracer.models import TRACER_VERSION, Event, Trace, TraceException, runtime_platform


class TraceSerializer:
    """Turns one session's buffers into a single JSON document.

    ``verbose=True`` is the collector's wire format: every field is emitted,
    including defaults, and enums are written as integers. ``verbose=False``
    drops default-valued fields and writes enum names, which is easier to
    read in debug output.
    """

    def __init__(self, verbose: bool = True) -> None:
        self.verbose = verbose

    def build(
        self,
        app_name: str,
        token: str,
        events: Sequence[Event],
        exceptions: Sequence[TraceException],
    ) -> Trace:
        return Trace(
            app_name=app_name,
            token=token,
            events=list(events),
            exceptions=list(exceptions),
            version=TRACER_VERSION,
            platform=runtime_platform(),
        )

    def serialize(
        self,
        app_name: str,
        token: str,
        events: Sequence[Event],
        exceptions: Sequence[TraceException],
    ) -> str:
        try:
            trace = self.build(app_name, token, events, exceptions)
            return trace.model_dump_json(
                exclude_defaults=not self.verbose,
                context={"enums_as_ints": self.verbose},
            )
        except (TypeError, ValueError) as exc:
            # pydantic's ValidationError and PydanticSerializationError are ValueErrors
            raise SerializationError(f"could not serialize trace: {exc}") from exc
