"""Internet Explorer driver kind (IEDriverServer)."""

from ..log import deprecate
from ..service import Service
from .base import Driver


class IEService(Service):
    kind = "ie"
    executable = "IEDriverServer"
    default_port = 5555
    missing_text = (
        "Unable to find IEDriverServer. Please download the server from "
        "https://www.selenium.dev/downloads/ and place it somewhere on your PATH."
    )
    value_options = {
        "log_level": "--log-level",
        "log_file": "--log-file",
        "implementation": "--implementation",
        "host": "--host",
        "extract_path": "--extract_path",
    }
    switch_options = {
        "silent": "--silent",
    }

    @classmethod
    def format_option(cls, key: str, value) -> str:
        if key in ("log_level", "implementation"):
            return str(value).upper()
        return str(value)


class IEDriver(Driver):
    browser = "internet explorer"
    service_class = IEService


def set_driver_path(path) -> None:
    """Deprecated, use IEService.set_driver_path."""
    deprecate(f"{__name__}.set_driver_path", "IEService.set_driver_path", id="driver_path_accessor")
    IEService.set_driver_path(path)


def driver_path():
    """Deprecated, use IEService.get_driver_path."""
    deprecate(f"{__name__}.driver_path", "IEService.get_driver_path", id="driver_path_accessor")
    return IEService.get_driver_path()
