"""Logging for the listings frontend.

Every record goes through the ``listings`` logger. Modules ask for a child
named after the layer they sit in:

* ``services.synchronizer`` / ``services.autocomplete`` for the state layer
* ``client`` for calls made by ``ListingsClient``
* ``ui`` / ``ui.admin`` for the Streamlit pages

Messages are written as ``event key=value``; fetches carry ``request_id`` so
a single listing request can be followed from ``fetch_issued`` to
``fetch_resolved`` or ``fetch_failure_discarded``.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

NAMESPACE = "listings"
DEFAULT_LEVEL = "INFO"


def resolve_level(environ: Optional[Mapping[str, str]] = None) -> int:
    """Read ``LOG_LEVEL``; unknown names fall back to INFO."""

    env = os.environ if environ is None else environ
    name = (env.get("LOG_LEVEL") or DEFAULT_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(namespace: str = NAMESPACE) -> logging.Logger:
    """Attach the one-line handler to ``namespace`` once per process.

    Streamlit re-executes the page script on every interaction, so the handler
    is only added the first time; later calls return the configured logger.
    """

    logger = logging.getLogger(namespace)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    logger.addHandler(handler)
    logger.setLevel(resolve_level())
    logger.propagate = False
    return logger


def get_logger(child: Optional[str] = None) -> logging.Logger:
    base = configure_logging()
    return base.getChild(child) if child else base


__all__ = ["DEFAULT_LEVEL", "NAMESPACE", "configure_logging", "get_logger", "resolve_level"]
