"""Firefox driver kind (geckodriver)."""

from ..log import deprecate
from ..service import Service
from .base import Driver


class FirefoxService(Service):
    kind = "firefox"
    executable = "geckodriver"
    default_port = 4444
    missing_text = (
        "Unable to find Mozilla geckodriver. Please download the server from "
        "https://github.com/mozilla/geckodriver/releases and place it somewhere on your PATH."
    )
    value_options = {
        "binary": "--binary",
        "log": "--log",
        "marionette_port": "--marionette-port",
        "host": "--host",
    }


class FirefoxDriver(Driver):
    browser = "firefox"
    service_class = FirefoxService


def set_driver_path(path) -> None:
    """Deprecated, use FirefoxService.set_driver_path."""
    deprecate(f"{__name__}.set_driver_path", "FirefoxService.set_driver_path", id="driver_path_accessor")
    FirefoxService.set_driver_path(path)


def driver_path():
    """Deprecated, use FirefoxService.get_driver_path."""
    deprecate(f"{__name__}.driver_path", "FirefoxService.get_driver_path", id="driver_path_accessor")
    return FirefoxService.get_driver_path()
