"""Supported driver kinds."""

from .base import Driver
from .chrome import ChromeDriver, ChromeService
from .edge import EdgeDriver, EdgeService
from .firefox import FirefoxDriver, FirefoxService
from .ie import IEDriver, IEService
from .safari import SafariDriver, SafariService


DRIVERS = {
    "chrome": ChromeDriver,
    "firefox": FirefoxDriver,
    "safari": SafariDriver,
    "edge": EdgeDriver,
    "ie": IEDriver,
}


def get_driver(name: str) -> type:
    """Get a Driver class by kind name."""
    if name not in DRIVERS:
        raise ValueError(f"Unknown driver: {name}. Available: {list(DRIVERS.keys())}")

    return DRIVERS[name]


__all__ = [
    "Driver",
    "ChromeDriver", "ChromeService",
    "EdgeDriver", "EdgeService",
    "FirefoxDriver", "FirefoxService",
    "IEDriver", "IEService",
    "SafariDriver", "SafariService",
    "DRIVERS", "get_driver",
]
