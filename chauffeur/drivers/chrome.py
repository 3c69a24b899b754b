"""Chrome driver kind (chromedriver)."""

from ..log import deprecate
from ..service import Service
from .base import Driver


class ChromeService(Service):
    kind = "chrome"
    executable = "chromedriver"
    default_port = 9515
    shutdown_supported = True
    missing_text = (
        "Unable to find chromedriver. Please download the server from "
        "https://googlechromelabs.github.io/chrome-for-testing/ and place it somewhere on your PATH."
    )
    value_options = {
        "log_path": "--log-path",
        "url_base": "--url-base",
        "port_server": "--port-server",
        "whitelisted_ips": "--whitelisted-ips",
    }
    switch_options = {
        "verbose": "--verbose",
        "silent": "--silent",
    }


class ChromeDriver(Driver):
    browser = "chrome"
    service_class = ChromeService


def set_driver_path(path) -> None:
    """Deprecated, use ChromeService.set_driver_path."""
    deprecate(f"{__name__}.set_driver_path", "ChromeService.set_driver_path", id="driver_path_accessor")
    ChromeService.set_driver_path(path)


def driver_path():
    """Deprecated, use ChromeService.get_driver_path."""
    deprecate(f"{__name__}.driver_path", "ChromeService.get_driver_path", id="driver_path_accessor")
    return ChromeService.get_driver_path()
