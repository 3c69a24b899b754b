"""Base class for driver kinds."""

from typing import Optional

from ..bridge import Bridge
from ..config import DEPRECATED_SERVICE_KEYS, map_deprecated_options
from ..log import deprecate
from ..service import Service


class Driver:
    """A browser session, backed by a local Service unless told otherwise.

    Subclasses set `browser` and `service_class`.
    """

    browser: str = "base"
    service_class: type = Service
    bridge_class: type = Bridge

    def __init__(
        self,
        url: Optional[str] = None,
        service: Optional[Service] = None,
        capabilities: Optional[dict] = None,
        **opts,
    ):
        service_opts, deprecated, unknown = map_deprecated_options(opts)
        if unknown:
            raise TypeError(f"{type(self).__name__}() got unexpected keyword arguments: {sorted(unknown)}")
        for key in deprecated:
            self._warn_deprecated(key)

        self._service: Optional[Service] = None
        self._owns_service = False
        if url is None:
            url = self._service_url(service, service_opts)

        try:
            self._bridge = self.bridge_class.handshake(url, capabilities or self.default_capabilities())
        except Exception:
            if self._owns_service:
                self._service.stop()
            raise

    @classmethod
    def default_capabilities(cls) -> dict:
        return {"browserName": cls.browser}

    def _warn_deprecated(self, key: str) -> None:
        name = f"{type(self).__module__}.{type(self).__name__}"
        service_name = getattr(self.service_class, "__name__", "Service")
        target = DEPRECATED_SERVICE_KEYS[key]
        deprecate(
            f"{name}({key}=...)",
            f"{name}(service={service_name}({target}=...))",
            id=key,
        )

    def _service_url(self, service, service_opts) -> str:
        """Start a service (building one if needed) and return its URI."""
        if service is None:
            service = self.service_class(
                path=service_opts.path,
                port=service_opts.port,
                args=service_opts.args,
            )
        self._service = service
        if not service.running:
            self._owns_service = True
            service.start()
        return service.uri

    @property
    def service(self) -> Optional[Service]:
        return self._service

    @property
    def session_id(self) -> str:
        return self._bridge.session_id

    @property
    def capabilities(self) -> dict:
        return self._bridge.capabilities

    def quit(self) -> None:
        """End the session and stop the service."""
        try:
            self._bridge.quit()
        finally:
            if self._service is not None:
                self._service.stop()

    def __enter__(self) -> "Driver":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.quit()
