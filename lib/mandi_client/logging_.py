from __future__ import annotations

import logging

_TRANSPORT_LOGGERS = ("httpx", "httpcore")


def setup_logging(verbose: bool, *, trace_transport: bool | None = None) -> None:
    """Configure root logging for applications embedding the client.

    ``trace_transport`` controls httpx/httpcore output separately and follows
    ``verbose`` when not given.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("mandi_client").setLevel(level)

    if trace_transport is None:
        trace_transport = verbose
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if trace_transport else logging.WARNING)
