"""CLI JSON-lines adapter — reads records from stdin and ships them as one trace.

Each stdin line is either ``{"event": {...}}`` or ``{"exception": {...}}``.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import TextIO

from pydantic import ValidationError

from epsagon_tracer import Config, Event, TraceException, Tracer, fill_config_defaults
from epsagon_tracer.transport.interface import Transport

logger = logging.getLogger(__name__)

USAGE = "Usage: epsagon-trace [--debug] [application-name] < records.jsonl"


def run_cli(
    lines: TextIO,
    application_name: str = "",
    debug: bool = False,
    transport: Transport | None = None,
) -> tuple[int, int]:
    """Feed every record from *lines* to a standalone tracer, then stop it.

    The process-wide tracer is left alone. Returns ``(events, exceptions)``
    recorded by the tracer.
    """
    config = fill_config_defaults(Config(application_name=application_name, debug=debug))
    tracer = Tracer(config, transport=transport)
    tracer.start()
    n_events = n_exceptions = 0
    for lineno, raw in enumerate(lines, start=1):
        raw = raw.strip()
        if not raw:
            continue
        try:
            record = json.loads(raw)
            if "event" in record:
                if tracer.add_event(Event.model_validate(record["event"])):
                    n_events += 1
            elif "exception" in record:
                if tracer.add_exception(TraceException.model_validate(record["exception"])):
                    n_exceptions += 1
            else:
                logger.warning("line %d: expected an 'event' or 'exception' key", lineno)
        except (json.JSONDecodeError, ValidationError, TypeError) as exc:
            logger.warning("line %d: skipping malformed record: %s", lineno, exc)

    tracer.stop()
    return n_events, n_exceptions


def main() -> None:
    args = sys.argv[1:]
    if "-h" in args or "--help" in args:
        print(USAGE)
        return
    debug = "--debug" in args
    names = [a for a in args if a != "--debug"]
    if len(names) > 1:
        print(USAGE, file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    n_events, n_exceptions = run_cli(sys.stdin, names[0] if names else "", debug=debug)
    print(json.dumps({"events": n_events, "exceptions": n_exceptions}), flush=True)


if __name__ == "__main__":
    main()
