from __future__ import annotations

import logging

from mandi_client.logging_ import setup_logging


def test_setup_logging_verbose_enables_httpx_debug() -> None:
    setup_logging(True)
    assert logging.getLogger("httpx").level == logging.DEBUG
    assert logging.getLogger("httpcore").level == logging.DEBUG


def test_setup_logging_quiet_silences_httpx() -> None:
    setup_logging(False)
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING


def test_setup_logging_can_trace_client_without_transport() -> None:
    setup_logging(True, trace_transport=False)
    assert logging.getLogger("mandi_client").level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
