"""Shared fixtures."""

import logging

import pytest

from chauffeur import config, log
from chauffeur.probe import PlatformProbe


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    """Isolate process-wide configuration between tests."""
    monkeypatch.delenv(config.CONFIG_ENV_VAR, raising=False)
    config.reset_driver_paths()
    log.reset_ignored()
    yield
    config.reset_driver_paths()
    log.reset_ignored()
    log.logger.setLevel(logging.NOTSET)


@pytest.fixture
def executable_ok(monkeypatch):
    """Treat every path as an existing executable."""
    monkeypatch.setattr(PlatformProbe, "assert_executable", staticmethod(lambda path: True))


@pytest.fixture
def deprecations(caplog):
    """Return a callable listing the deprecation notices logged so far."""
    caplog.set_level(logging.WARNING, logger="chauffeur")

    def collect() -> list[str]:
        return [r.getMessage() for r in caplog.records if "[DEPRECATION]" in r.getMessage()]

    return collect
