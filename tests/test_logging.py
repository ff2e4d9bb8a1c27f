"""Tests pour la configuration structlog."""

from __future__ import annotations

import structlog

from almanac.core.logging import setup_logging


def test_setup_logging_filters_by_level(capsys) -> None:
    """Teste que les événements sous le niveau configuré sont filtrés."""
    setup_logging("warning")
    try:
        log = structlog.get_logger("almanac.tests")
        log.info("hidden_event")
        log.warning("shown_event", year=2030)
    finally:
        structlog.reset_defaults()
    err = capsys.readouterr().err
    assert "shown_event" in err
    assert "year" in err
    assert "hidden_event" not in err


def test_setup_logging_unknown_level_defaults_to_info(capsys) -> None:
    """Teste qu'un niveau inconnu retombe sur INFO."""
    setup_logging("chatty")
    try:
        log = structlog.get_logger("almanac.tests.unknown")
        log.debug("debug_event")
        log.info("info_event")
    finally:
        structlog.reset_defaults()
    err = capsys.readouterr().err
    assert "info_event" in err
    assert "debug_event" not in err
