"""Driver service lifecycle management."""

import logging
import os
import signal
import subprocess
import time
from pathlib import Path
from typing import Literal, Optional

import httpx

from . import config
from .config import Settings
from .errors import ServiceStartError
from .ports import is_free
from .probe import PlatformProbe

logger = logging.getLogger(__name__)

ServiceState = Literal["unstarted", "running", "stopped"]


class ServiceManager:
    """Manages the lifecycle of one driver process."""

    def __init__(
        self,
        command: list[str],
        host: str,
        port: int,
        health_path: str = "/status",
        start_timeout: float = 20.0,
        stop_timeout: float = 20.0,
        poll_interval: float = 0.25,
        log_path: Optional[Path] = None,
        shutdown_supported: bool = False,
    ):
        self.command = command
        self.host = host
        self.port = port
        self.health_path = health_path
        self.start_timeout = start_timeout
        self.stop_timeout = stop_timeout
        self.poll_interval = poll_interval
        self.log_path = log_path
        self.shutdown_supported = shutdown_supported
        self._process: Optional[subprocess.Popen] = None
        self._log_file: Optional[object] = None

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def start(self) -> None:
        """Start the process and block until it answers HTTP requests."""
        if not is_free(self.port, self.host):
            raise ServiceStartError(f"service port {self.port} is in use")

        output = subprocess.DEVNULL
        if self.log_path:
            self._log_file = open(self.log_path, "a")
            output = self._log_file

        logger.debug("starting %s", subprocess.list2cmdline(self.command))
        try:
            self._process = subprocess.Popen(
                self.command,
                stdin=subprocess.DEVNULL,
                stdout=output,
                stderr=subprocess.STDOUT,
                # Own process group, so stop() reaches any children too
                start_new_session=not PlatformProbe.windows(),
            )
        except OSError as e:
            self._close_log()
            raise ServiceStartError(f"unable to launch {self.command[0]!r}: {e}") from e

        try:
            self._wait_for_ready()
        except BaseException:
            self._terminate()
            raise
        logger.info("driver %s listening on %s (pid %d)", self.command[0], self.base_url, self._process.pid)

    def _wait_for_ready(self) -> None:
        """Wait for the service to become ready."""
        url = f"{self.base_url}{self.health_path}"
        deadline = time.monotonic() + self.start_timeout

        while time.monotonic() < deadline:
            # Check if process died
            exit_code = self._process.poll()
            if exit_code is not None:
                raise ServiceStartError(
                    f"{self.command[0]!r} exited with code {exit_code} before accepting connections"
                )

            try:
                # Any HTTP answer means the driver is listening
                httpx.get(url, timeout=2.0)
                return
            except httpx.TransportError:
                # Refused, reset or dropped: not ready yet
                pass

            time.sleep(self.poll_interval)

        raise ServiceStartError(
            f"unable to connect to {self.command[0]!r} at {self.base_url} "
            f"within {self.start_timeout}s"
        )

    def stop(self) -> None:
        """Stop the process, escalating to a kill if it does not exit."""
        if self._process is None:
            self._close_log()
            return

        if self.shutdown_supported and self._process.poll() is None:
            try:
                httpx.get(f"{self.base_url}/shutdown", timeout=self.stop_timeout)
            except httpx.HTTPError as e:
                logger.debug("shutdown request failed: %s", e)

        self._terminate()

    def _terminate(self) -> None:
        try:
            if self._process.poll() is None:
                # Try graceful shutdown first
                self._send_signal(graceful=True)
                try:
                    self._process.wait(timeout=self.stop_timeout)
                except subprocess.TimeoutExpired:
                    logger.warning("pid %d did not exit after %ss, killing it", self._process.pid, self.stop_timeout)
                    self._send_signal(graceful=False)
                    try:
                        self._process.wait(timeout=self.stop_timeout)
                    except subprocess.TimeoutExpired:
                        logger.error("unable to kill pid %d", self._process.pid)
        finally:
            self._process = None
            self._close_log()

    def _send_signal(self, graceful: bool) -> None:
        if PlatformProbe.windows():
            if graceful:
                self._process.terminate()
            else:
                self._process.kill()
            return
        sig = signal.SIGTERM if graceful else signal.SIGKILL
        try:
            os.killpg(self._process.pid, sig)
        except (ProcessLookupError, PermissionError):
            pass

    def _close_log(self) -> None:
        if self._log_file:
            self._log_file.close()
            self._log_file = None

    def is_running(self) -> bool:
        """Check if the process is alive."""
        if self._process is None:
            return False
        return self._process.poll() is None

    def get_exit_code(self) -> Optional[int]:
        """Get the exit code if the process has terminated."""
        if self._process is None:
            return None
        return self._process.poll()


class Service:
    """A local driver executable exposed over HTTP.

    Subclasses describe one driver kind through class attributes. A Service
    is constructed unstarted, runs once and is stopped for good; build a new
    instance to run the driver again.
    """

    kind: Optional[str] = None
    executable: Optional[str] = None
    default_port: Optional[int] = None
    shutdown_supported: bool = False
    missing_text: str = "Unable to find the driver executable. Make sure it is on your PATH."
    value_options: dict[str, str] = {}
    switch_options: dict[str, str] = {}

    _kinds: dict[str, type] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.kind:
            Service._kinds[cls.kind] = cls

    @classmethod
    def for_kind(cls, name: str, **opts) -> "Service":
        """Construct the Service registered for driver kind `name`."""
        if name not in cls._kinds:
            raise ValueError(f"Unknown driver kind: {name}. Available: {sorted(cls._kinds)}")
        return cls._kinds[name](**opts)

    @classmethod
    def chrome(cls, **opts) -> "Service":
        return cls.for_kind("chrome", **opts)

    @classmethod
    def firefox(cls, **opts) -> "Service":
        return cls.for_kind("firefox", **opts)

    @classmethod
    def safari(cls, **opts) -> "Service":
        return cls.for_kind("safari", **opts)

    @classmethod
    def edge(cls, **opts) -> "Service":
        return cls.for_kind("edge", **opts)

    @classmethod
    def ie(cls, **opts) -> "Service":
        return cls.for_kind("ie", **opts)

    @classmethod
    def set_driver_path(cls, value) -> None:
        """Set the executable used when no explicit path is given.

        `value` is a path string or a zero-argument callable returning one;
        callables are only invoked when a Service is constructed.
        """
        config.set_driver_path(cls.kind, value)

    @classmethod
    def get_driver_path(cls):
        return config.get_driver_path(cls.kind)

    @classmethod
    def reset_driver_path(cls) -> None:
        config.set_driver_path(cls.kind, None)

    @classmethod
    def extract_service_args(cls, driver_opts: dict) -> list[str]:
        """Turn a legacy driver options mapping into command line arguments.

        `args` is taken as-is, keys in `value_options` become `--flag=value`
        and truthy keys in `switch_options` become bare flags. Anything else
        is ignored with a warning.
        """
        driver_opts = dict(driver_opts)
        driver_args = [str(a) for a in driver_opts.pop("args", [])]
        for key, flag in cls.value_options.items():
            if key in driver_opts:
                driver_args.append(f"{flag}={cls.format_option(key, driver_opts.pop(key))}")
        for key, flag in cls.switch_options.items():
            if driver_opts.pop(key, False):
                driver_args.append(flag)
        if driver_opts:
            logger.warning("ignoring unsupported %s driver options: %s", cls.kind, sorted(driver_opts))
        return driver_args

    @classmethod
    def format_option(cls, key: str, value) -> str:
        return str(value)

    def __init__(self, path=None, port: Optional[int] = None, args=None, settings: Optional[Settings] = None):
        resolved = config.resolve(type(self), path=path, port=port, args=args)
        self._executable_path = resolved.executable_path
        self._port = resolved.port
        self._extra_args = resolved.extra_args
        self.settings = settings if settings is not None else Settings.load()
        self.host = PlatformProbe.localhost()
        self._uri = f"http://{self.host}:{self._port}"
        self.state: ServiceState = "unstarted"
        self._manager: Optional[ServiceManager] = None

    @property
    def executable_path(self) -> str:
        return self._executable_path

    @property
    def port(self) -> int:
        return self._port

    @property
    def extra_args(self) -> list[str]:
        return list(self._extra_args)

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def running(self) -> bool:
        return self.state == "running"

    def port_args(self) -> list[str]:
        return [f"--port={self._port}"]

    def command(self) -> list[str]:
        """The argv used to launch the driver."""
        return [self._executable_path] + self.port_args() + self._extra_args

    def start(self) -> None:
        """Launch the driver and wait until it is reachable."""
        if self.state == "running":
            raise ServiceStartError(f"already started: {self._uri} {self._executable_path!r}")
        if self.state == "stopped":
            raise ServiceStartError("service has been stopped; construct a new one")

        manager = ServiceManager(
            self.command(),
            host=self.host,
            port=self._port,
            health_path=self.settings.health_path,
            start_timeout=self.settings.start_timeout,
            stop_timeout=self.settings.stop_timeout,
            poll_interval=self.settings.poll_interval,
            log_path=Path(self.settings.log_path) if self.settings.log_path else None,
            shutdown_supported=self.shutdown_supported,
        )
        manager.start()
        self._manager = manager
        self.state = "running"

    def stop(self) -> None:
        """Stop the driver. Safe to call in any state."""
        if self.state == "stopped":
            return
        try:
            if self._manager is not None:
                self._manager.stop()
                logger.info("stopped %s at %s", self._executable_path, self._uri)
        finally:
            self._manager = None
            self.state = "stopped"

    def process_alive(self) -> bool:
        return self._manager is not None and self._manager.is_running()

    def exit_code(self) -> Optional[int]:
        return self._manager.get_exit_code() if self._manager else None

    def __enter__(self) -> "Service":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._executable_path!r} {self._uri} {self.state}>"
