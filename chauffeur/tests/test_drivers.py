"""Tests for driver construction."""

import pytest
from unittest.mock import patch, MagicMock

from chauffeur.bridge import Bridge
from chauffeur.drivers import get_driver, Driver
from chauffeur.drivers.chrome import ChromeDriver, ChromeService
from chauffeur.drivers.firefox import FirefoxDriver
from chauffeur.drivers.safari import SafariDriver
from chauffeur.errors import ServiceStartError, SessionError


@pytest.fixture
def service():
    return MagicMock(running=False, uri="http://example.com")


@pytest.fixture
def bridge():
    return MagicMock(session_id="abc", capabilities={"browserName": "chrome"})


@pytest.fixture
def handshake(bridge):
    with patch.object(Bridge, "handshake", return_value=bridge) as mock:
        yield mock


@pytest.fixture
def service_class(service):
    with patch.object(ChromeDriver, "service_class") as mock:
        mock.return_value = service
        yield mock


class TestGetDriver:
    def test_get_chrome(self):
        assert get_driver("chrome") is ChromeDriver

    def test_get_safari(self):
        assert get_driver("safari") is SafariDriver

    def test_unknown_driver_raises_error(self):
        with pytest.raises(ValueError, match="Unknown driver"):
            get_driver("netscape")

    def test_default_capabilities(self):
        assert FirefoxDriver.default_capabilities() == {"browserName": "firefox"}

    def test_subclasses_share_base(self):
        assert issubclass(ChromeDriver, Driver)
        assert ChromeDriver.service_class is ChromeService


class TestServiceShortCircuit:
    def test_not_created_when_url_is_provided(self, handshake, service_class):
        ChromeDriver(url="http://example.com:4321")

        service_class.assert_not_called()
        handshake.assert_called_once_with("http://example.com:4321", {"browserName": "chrome"})

    def test_created_when_url_is_not_provided(self, handshake, service_class, service):
        driver = ChromeDriver()

        service_class.assert_called_once_with(path=None, port=None, args=None)
        service.start.assert_called_once_with()
        handshake.assert_called_once_with("http://example.com", {"browserName": "chrome"})
        assert driver.service is service
        assert driver.session_id == "abc"

    def test_accepts_service_without_creating_a_new_instance(self, handshake, service_class, service):
        driver = ChromeDriver(service=service)

        service_class.assert_not_called()
        service.start.assert_called_once_with()
        assert driver.service is service

    def test_running_service_is_not_restarted(self, handshake, service_class, service):
        service.running = True

        ChromeDriver(service=service)

        service.start.assert_not_called()
        handshake.assert_called_once_with("http://example.com", {"browserName": "chrome"})

    def test_url_wins_over_service(self, handshake, service):
        ChromeDriver(url="http://example.com:4321", service=service)

        service.start.assert_not_called()
        handshake.assert_called_once_with("http://example.com:4321", {"browserName": "chrome"})

    def test_custom_capabilities(self, handshake, service_class):
        ChromeDriver(capabilities={"browserName": "chrome", "acceptInsecureCerts": True})

        assert handshake.call_args.args[1] == {"browserName": "chrome", "acceptInsecureCerts": True}


class TestDeprecatedKeywords:
    def test_accepts_driver_path_but_warns(self, handshake, service_class, deprecations):
        driver_path = "/path/to/driver"

        ChromeDriver(driver_path=driver_path)

        service_class.assert_called_once_with(path=driver_path, port=None, args=None)
        messages = deprecations()
        assert len(messages) == 1
        assert "chauffeur.drivers.chrome.ChromeDriver(driver_path=...)" in messages[0]

    def test_accepts_port_but_warns(self, handshake, service_class, deprecations):
        ChromeDriver(port=1234)

        service_class.assert_called_once_with(path=None, port=1234, args=None)
        messages = deprecations()
        assert len(messages) == 1
        assert "ChromeDriver(port=...)" in messages[0]

    def test_accepts_driver_opts_but_warns(self, handshake, service_class, deprecations):
        driver_opts = {"foo": "bar", "bar": ["--foo", "--bar"]}

        ChromeDriver(driver_opts=driver_opts)

        service_class.assert_called_once_with(path=None, port=None, args=driver_opts)
        messages = deprecations()
        assert len(messages) == 1
        assert "ChromeDriver(driver_opts=...)" in messages[0]

    def test_each_key_warns_separately(self, handshake, service_class, deprecations):
        ChromeDriver(driver_path="/d", port=1234, driver_opts={})

        messages = deprecations()
        assert len(messages) == 3
        assert len(set(messages)) == 3

    def test_ignored_id_is_silent(self, handshake, service_class, deprecations):
        from chauffeur.log import ignore
        ignore("port")

        ChromeDriver(port=1234)

        assert deprecations() == []

    def test_unknown_keyword_raises(self, handshake, service_class):
        with pytest.raises(TypeError, match="unexpected keyword"):
            ChromeDriver(drivr_path="/d")
        service_class.assert_not_called()


class TestFailures:
    def test_handshake_failure_stops_owned_service(self, handshake, service_class, service):
        handshake.side_effect = SessionError("session not created")

        with pytest.raises(SessionError, match="session not created"):
            ChromeDriver()

        service.stop.assert_called_once_with()

    def test_handshake_failure_leaves_running_service_alone(self, handshake, service):
        service.running = True
        handshake.side_effect = SessionError("session not created")

        with pytest.raises(SessionError):
            ChromeDriver(service=service)

        service.start.assert_not_called()
        service.stop.assert_not_called()

    def test_service_start_failure_propagates(self, handshake, service_class, service):
        service.start.side_effect = ServiceStartError("unable to connect")

        with pytest.raises(ServiceStartError):
            ChromeDriver()

        handshake.assert_not_called()


class TestQuit:
    def test_quit_ends_session_and_stops_service(self, handshake, service_class, service, bridge):
        driver = ChromeDriver()
        driver.quit()

        bridge.quit.assert_called_once_with()
        service.stop.assert_called_once_with()

    def test_quit_stops_service_when_bridge_fails(self, handshake, service_class, service, bridge):
        bridge.quit.side_effect = SessionError("gone")
        driver = ChromeDriver()

        with pytest.raises(SessionError):
            driver.quit()

        service.stop.assert_called_once_with()

    def test_quit_with_url_has_no_service(self, handshake, bridge):
        driver = ChromeDriver(url="http://example.com:4321")
        driver.quit()

        assert driver.service is None
        bridge.quit.assert_called_once_with()

    def test_context_manager(self, handshake, service_class, service, bridge):
        with ChromeDriver() as driver:
            assert driver.capabilities == {"browserName": "chrome"}

        service.stop.assert_called_once_with()
