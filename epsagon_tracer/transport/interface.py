"""Transport ABC — no internal deps."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Transport(ABC):
    """Delivers one serialized trace to the collector.

    ``send`` must not raise: failures are logged and reported as ``False``.
    """

    @abstractmethod
    def send(self, payload: str) -> bool: ...
