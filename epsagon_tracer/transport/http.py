"""HTTP transport — one blocking POST per flush, no retries."""

from __future__ import annotations

import logging

import httpx

from epsagon_tracer.errors import TransportError
from epsagon_tracer.transport.interface import Transport

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 1.0


class HttpTransport(Transport):
    def __init__(
        self,
        collector_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        """Create a transport for *collector_url*.

        Args:
            collector_url: Full URL the trace is POSTed to.
            timeout: Seconds before the request is abandoned.
            client: Optional injected httpx client for testing / transport control.
        """
        self.collector_url = collector_url
        self.timeout = timeout
        self._client = client

    def post(self, payload: str) -> httpx.Response:
        """POST *payload* and return the response. Raises ``TransportError``."""
        headers = {"Content-Type": "application/json"}
        try:
            if self._client is not None:
                resp = self._client.post(
                    self.collector_url, content=payload, headers=headers, timeout=self.timeout,
                )
            else:
                with httpx.Client() as client:
                    resp = client.post(
                        self.collector_url, content=payload, headers=headers, timeout=self.timeout,
                    )
        except httpx.HTTPError as exc:
            raise TransportError(f"error while sending traces: {exc}") from exc

        if not resp.is_success:
            raise TransportError(
                f"collector responded with HTTP {resp.status_code}",
                status_code=resp.status_code,
                body=resp.text,
            )
        return resp

    def send(self, payload: str) -> bool:
        try:
            self.post(payload)
        except TransportError as exc:
            logger.error("Error while sending traces to %s: %s %s", self.collector_url, exc, exc.body)
            return False
        return True
