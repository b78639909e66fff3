"""Settings and logging configuration tests."""

import logging

import pytest

from libs.core.logging_setup import LOGGER_ROOTS, setup_logging
from services.api_gateway.settings import Settings


def test_settings_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.scoring_workers == 1
    assert settings.cycle_timeout_sec is None
    assert settings.waiting_ratio == 1.5
    assert settings.low_priority_ceiling == 5.0


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DISPATCH_SCORING_WORKERS", "4")
    monkeypatch.setenv("DISPATCH_CYCLE_TIMEOUT_SEC", "2.5")
    monkeypatch.setenv("DISPATCH_LOG_JSON", "true")

    settings = Settings(_env_file=None)

    assert settings.scoring_workers == 4
    assert settings.cycle_timeout_sec == 2.5
    assert settings.log_json is True


def test_setup_logging_sets_package_levels() -> None:
    setup_logging("WARNING")

    assert logging.getLogger("libs").level == logging.WARNING
    assert logging.getLogger("services").level == logging.WARNING

    setup_logging("DEBUG")
    assert logging.getLogger("libs").level == logging.DEBUG


def test_json_logging_output(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging("INFO", log_json=True)
    try:
        logging.getLogger("libs.core.application.orchestrator").info("cycle done")
        out = capsys.readouterr().out
    finally:
        for name in LOGGER_ROOTS:
            logging.getLogger(name).handlers.clear()

    assert '"event": "cycle done"' in out
    assert '"level": "info"' in out
