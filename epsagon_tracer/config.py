"""Tracer configuration — pydantic model + environment defaults."""

from __future__ import annotations

import logging
import os
from typing import Mapping

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"
COLLECTOR_URL_TEMPLATE = "http://{region}.tc.epsagon.com"


class Config(BaseModel):
    """Configuration for a tracer. Frozen once built."""

    model_config = ConfigDict(frozen=True)

    application_name: str = ""
    token: str = ""
    collector_url: str = ""
    metadata_only: bool = False
    debug: bool = False


def fill_config_defaults(config: Config, environ: Mapping[str, str] | None = None) -> Config:
    """Return a copy of *config* with unset fields filled from the environment.

    Environment variables (all optional):
      EPSAGON_DEBUG  — ``TRUE`` turns debug logging on
      EPSAGON_TOKEN  — used when no token was given
      AWS_REGION     — picks the regional collector, default ``us-east-1``
    """
    env = os.environ if environ is None else environ
    updates: dict[str, object] = {}

    debug = config.debug
    if not debug and env.get("EPSAGON_DEBUG") == "TRUE":
        debug = True
        updates["debug"] = True

    if not config.token:
        updates["token"] = env.get("EPSAGON_TOKEN", "")
        if debug:
            logger.debug("EPSAGON DEBUG: setting token from environment variable")

    if not config.collector_url:
        region = env.get("AWS_REGION") or DEFAULT_REGION
        updates["collector_url"] = COLLECTOR_URL_TEMPLATE.format(region=region)
        if debug:
            logger.debug("EPSAGON DEBUG: setting collector url to %s", updates["collector_url"])

    return config.model_copy(update=updates)
