"""Tests for log module."""

import io
import logging

from chauffeur import log


class TestDeprecate:
    def test_message_names_old_and_new(self, deprecations):
        log.deprecate("chauffeur.drivers.safari.set_driver_path", "SafariService.set_driver_path")
        assert deprecations() == [
            "[DEPRECATION] chauffeur.drivers.safari.set_driver_path is deprecated. "
            "Use SafariService.set_driver_path instead."
        ]

    def test_without_replacement(self, deprecations):
        log.deprecate("old_thing")
        assert deprecations() == ["[DEPRECATION] old_thing is deprecated."]

    def test_every_call_is_logged(self, deprecations):
        log.deprecate("old_thing", id="old")
        log.deprecate("old_thing", id="old")
        assert len(deprecations()) == 2

    def test_ignore(self, deprecations):
        log.ignore("old")
        log.deprecate("old_thing", id="old")
        log.deprecate("other_thing", id="other")
        messages = deprecations()
        assert len(messages) == 1
        assert "other_thing" in messages[0]

    def test_logged_at_warning(self, caplog):
        log.deprecate("old_thing")
        assert caplog.records[-1].levelno == logging.WARNING
        assert caplog.records[-1].name == "chauffeur"


class TestConfigureLogging:
    def test_writes_formatted_lines(self):
        stream = io.StringIO()
        handler = log.configure_logging(logging.DEBUG, stream)
        try:
            log.deprecate("old_thing")
        finally:
            log.logger.removeHandler(handler)

        assert "WARNING chauffeur [DEPRECATION] old_thing is deprecated." in stream.getvalue()
