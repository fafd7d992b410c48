"""Trace data models — no internal dependencies, only Pydantic + stdlib."""

from __future__ import annotations

import platform
import time
import traceback as tb
import uuid
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, Field, FieldSerializationInfo, field_serializer

TRACER_VERSION = "0.0.1"


def runtime_platform() -> str:
    return f"{platform.python_implementation()} {platform.python_version()}"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ErrorCode(IntEnum):
    OK = 0
    ERROR = 1
    EXCEPTION = 2


# ---------------------------------------------------------------------------
# Reported records (application → tracer)
# ---------------------------------------------------------------------------

class Resource(BaseModel):
    """What an event operated on, e.g. a DynamoDB table or an HTTP host."""
    name: str = ""
    type: str = ""
    operation: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)


class TraceException(BaseModel):
    """A single reported error."""
    type: str = ""
    message: str = ""
    traceback: str = ""
    time: float = 0.0
    additional_data: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: BaseException, **additional_data: Any) -> TraceException:
        return cls(
            type=type(exc).__name__,
            message=str(exc),
            traceback="".join(tb.format_exception(type(exc), exc, exc.__traceback__)),
            time=time.time(),
            additional_data=additional_data,
        )


class Event(BaseModel):
    """A single traced operation."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    start_time: float = 0.0
    resource: Resource = Field(default_factory=Resource)
    origin: str = ""
    duration: float = 0.0
    error_code: ErrorCode = ErrorCode.OK
    exception: TraceException | None = None

    @field_serializer("error_code")
    def _serialize_error_code(self, value: ErrorCode, info: FieldSerializationInfo) -> int | str:
        # Integers unless the caller explicitly asked for names
        if info.context and info.context.get("enums_as_ints") is False:
            return value.name
        return int(value)


# ---------------------------------------------------------------------------
# Wire payload (tracer → collector)
# ---------------------------------------------------------------------------

class Trace(BaseModel):
    app_name: str = ""
    token: str = ""
    events: list[Event] = Field(default_factory=list)
    exceptions: list[TraceException] = Field(default_factory=list)
    version: str
    platform: str
