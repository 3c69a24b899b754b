"""Service configuration: resolution, driver path overrides and settings."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Union

import yaml

from .errors import ConfigError, ExecutableNotFoundError
from .probe import PlatformProbe


CONFIG_ENV_VAR = "CHAUFFEUR_CONFIG"

DriverPathValue = Union[str, Callable[[], str]]

# Legacy Driver keywords and the Service argument each one maps onto.
DEPRECATED_SERVICE_KEYS = {
    "driver_path": "path",
    "port": "port",
    "driver_opts": "args",
}


@dataclass(frozen=True)
class DriverPath:
    """A registered driver path: either a literal or a zero-argument provider."""
    value: DriverPathValue

    def resolve(self) -> Optional[str]:
        if callable(self.value):
            return self.value()
        return self.value


# One slot per driver kind. Expected to be written once at start-up, so
# there is no locking.
_driver_paths: dict[str, DriverPath] = {}


def set_driver_path(kind: str, value: Optional[DriverPathValue]) -> None:
    """Register the driver path override for `kind`; None clears it."""
    if value is None:
        _driver_paths.pop(kind, None)
        return
    if isinstance(value, os.PathLike):
        value = os.fspath(value)
    if isinstance(value, str):
        PlatformProbe.assert_executable(value)
    elif not callable(value):
        raise ConfigError(f"driver path must be a string or a callable, got {type(value).__name__}")
    _driver_paths[kind] = DriverPath(value)


def get_driver_path(kind: str) -> Optional[DriverPathValue]:
    """Return the registered override for `kind` as it was set."""
    entry = _driver_paths.get(kind)
    return entry.value if entry else None


def resolve_driver_path(kind: str) -> Optional[str]:
    entry = _driver_paths.get(kind)
    return entry.resolve() if entry else None


def reset_driver_paths() -> None:
    _driver_paths.clear()


@dataclass(frozen=True)
class ServiceOptions:
    """Canonical Service arguments, before resolution."""
    path: Optional[DriverPathValue] = None
    port: Optional[int] = None
    args: Any = None


@dataclass
class ResolvedConfig:
    """Final executable path, port and extra arguments for one Service."""
    executable_path: str
    port: int
    extra_args: list[str] = field(default_factory=list)


def map_deprecated_options(opts: Mapping) -> tuple[ServiceOptions, list[str], dict]:
    """Split legacy Driver keywords out of `opts`.

    Returns the mapped ServiceOptions, the deprecated keys that were present
    (in declaration order) and the remaining options. `opts` is not modified.
    """
    remaining = dict(opts)
    mapped = {}
    used = []
    for key, target in DEPRECATED_SERVICE_KEYS.items():
        if key in remaining:
            mapped[target] = remaining.pop(key)
            used.append(key)
    return ServiceOptions(**mapped), used, remaining


def resolve(kind, path=None, port=None, args=None) -> ResolvedConfig:
    """Resolve the configuration of a Service of the given kind.

    `kind` is a Service class; it provides `kind`, `executable`,
    `default_port`, `missing_text` and `extract_service_args`.
    """
    return ResolvedConfig(
        executable_path=_resolve_path(kind, path),
        port=_resolve_port(kind, port),
        extra_args=_resolve_args(kind, args),
    )


def _resolve_path(kind, path) -> str:
    if callable(path):
        path = path()
    if path is None:
        path = resolve_driver_path(kind.kind)
    if path is None:
        path = PlatformProbe.find_binary(kind.executable)
    if path is None:
        raise ExecutableNotFoundError(kind.missing_text)
    path = os.fspath(path)
    PlatformProbe.assert_executable(path)
    return path


def _resolve_port(kind, port) -> int:
    if port is None:
        port = kind.default_port
    if isinstance(port, bool):
        raise ConfigError(f"invalid port: {port!r}")
    try:
        port = int(port)
    except (TypeError, ValueError):
        raise ConfigError(f"invalid port: {port!r}")
    if not 0 < port < 65536:
        raise ConfigError(f"invalid port: {port}")
    return port


def _resolve_args(kind, args) -> list[str]:
    if args is None:
        return []
    if isinstance(args, Mapping):
        return kind.extract_service_args(dict(args))
    if isinstance(args, str):
        raise ConfigError("service args must be a list of strings, not a string")
    return [str(a) for a in args]


@dataclass
class Settings:
    """Tunables for starting and stopping driver processes."""
    start_timeout: float = 20.0
    stop_timeout: float = 20.0
    poll_interval: float = 0.25
    health_path: str = "/status"
    log_path: Optional[str] = None
    driver_paths: dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "Settings":
        """Load settings from YAML at `path` or $CHAUFFEUR_CONFIG.

        Returns defaults when neither points at an existing file.
        """
        if path is None:
            path = os.environ.get(CONFIG_ENV_VAR)
            if not path:
                return cls()

        config_file = Path(path)
        if not config_file.exists():
            return cls()

        try:
            with open(config_file) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid settings file {config_file}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"settings file {config_file} must contain a mapping")
        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigError(f"invalid settings file {config_file}: {e}") from e

    def apply(self) -> None:
        """Register the configured driver paths."""
        for kind, value in self.driver_paths.items():
            set_driver_path(kind, value)
