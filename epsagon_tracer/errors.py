"""Tracer error types. None of these ever reach host application code."""

from __future__ import annotations


class TracerError(Exception):
    """Base class for tracer failures."""


class SerializationError(TracerError):
    """The trace payload could not be built."""


class TransportError(TracerError):
    """The collector could not be reached or rejected the payload."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
