"""Edge driver kind (msedgedriver)."""

from ..log import deprecate
from .base import Driver
from .chrome import ChromeService


class EdgeService(ChromeService):
    """msedgedriver is chromedriver underneath and takes the same options."""

    kind = "edge"
    executable = "msedgedriver"
    missing_text = (
        "Unable to find msedgedriver. Please download the server from "
        "https://developer.microsoft.com/microsoft-edge/tools/webdriver/ and place it somewhere on your PATH."
    )


class EdgeDriver(Driver):
    browser = "MicrosoftEdge"
    service_class = EdgeService


def set_driver_path(path) -> None:
    """Deprecated, use EdgeService.set_driver_path."""
    deprecate(f"{__name__}.set_driver_path", "EdgeService.set_driver_path", id="driver_path_accessor")
    EdgeService.set_driver_path(path)


def driver_path():
    """Deprecated, use EdgeService.get_driver_path."""
    deprecate(f"{__name__}.driver_path", "EdgeService.get_driver_path", id="driver_path_accessor")
    return EdgeService.get_driver_path()
