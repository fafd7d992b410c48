"""In-memory transport — keeps payloads instead of sending them."""

from __future__ import annotations

import json
import threading
from typing import Any

from epsagon_tracer.transport.interface import Transport


class RecordingTransport(Transport):
    """Records every payload it is asked to send. Used in tests and dry runs.

    Set ``succeed=False`` to simulate a collector that rejects the trace.
    """

    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.payloads: list[str] = []
        self._lock = threading.Lock()

    def send(self, payload: str) -> bool:
        with self._lock:
            self.payloads.append(payload)
        return self.succeed

    @property
    def call_count(self) -> int:
        return len(self.payloads)

    def traces(self) -> list[dict[str, Any]]:
        return [json.loads(p) for p in self.payloads]
