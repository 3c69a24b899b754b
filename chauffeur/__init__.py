"""Launch and supervise local WebDriver executables."""

from .bridge import Bridge
from .config import ResolvedConfig, ServiceOptions, Settings, resolve
from .drivers import (
    ChromeDriver, ChromeService,
    EdgeDriver, EdgeService,
    FirefoxDriver, FirefoxService,
    IEDriver, IEService,
    SafariDriver, SafariService,
    get_driver,
)
from .errors import (
    ChauffeurError,
    ConfigError,
    ExecutableNotFoundError,
    ServiceStartError,
    SessionError,
)
from .probe import PlatformProbe
from .service import Service, ServiceManager

__version__ = "0.1.0"
