"""Safari driver kind (safaridriver, macOS only)."""

from ..log import deprecate
from ..service import Service
from .base import Driver


class SafariService(Service):
    kind = "safari"
    executable = "safaridriver"
    default_port = 7050
    missing_text = (
        "Unable to find Apple's safaridriver. It ships with Safari 10 and later on macOS; "
        "run `safaridriver --enable` once to allow remote automation."
    )

    def port_args(self) -> list[str]:
        return ["--port", str(self.port)]


class SafariDriver(Driver):
    browser = "safari"
    service_class = SafariService


def set_driver_path(path) -> None:
    """Deprecated, use SafariService.set_driver_path."""
    deprecate(f"{__name__}.set_driver_path", "SafariService.set_driver_path", id="driver_path_accessor")
    SafariService.set_driver_path(path)


def driver_path():
    """Deprecated, use SafariService.get_driver_path."""
    deprecate(f"{__name__}.driver_path", "SafariService.get_driver_path", id="driver_path_accessor")
    return SafariService.get_driver_path()
