"""Minimal W3C WebDriver session client."""

import logging
from typing import Optional

import httpx

from .errors import SessionError

logger = logging.getLogger(__name__)


class Bridge:
    """An open session on a remote end.

    Only session creation and deletion are implemented; everything else is
    left to a full WebDriver client.
    """

    def __init__(self, url: str, session_id: str, capabilities: dict, client: httpx.Client):
        self.url = url
        self.session_id = session_id
        self.capabilities = capabilities
        self._client = client

    @classmethod
    def handshake(cls, url: str, capabilities: Optional[dict] = None, timeout: float = 60.0) -> "Bridge":
        """Create a new session at `url` and return a Bridge bound to it."""
        client = httpx.Client(base_url=url, timeout=timeout)
        payload = {"capabilities": {"alwaysMatch": capabilities or {}}}
        try:
            resp = client.post("/session", json=payload)
        except httpx.HTTPError as e:
            client.close()
            raise SessionError(f"unable to reach {url}: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            body = {}
        value = body.get("value") if isinstance(body, dict) else None
        if not isinstance(value, dict):
            value = {}

        if resp.status_code >= 400 or "error" in value or "sessionId" not in value:
            client.close()
            message = value.get("message") or resp.text[:200]
            raise SessionError(f"session not created ({resp.status_code}): {message}")

        logger.debug("created session %s at %s", value["sessionId"], url)
        return cls(url, value["sessionId"], value.get("capabilities", {}), client)

    def quit(self) -> None:
        """Delete the session and release the HTTP client."""
        try:
            self._client.delete(f"/session/{self.session_id}")
        except httpx.HTTPError as e:
            logger.warning("failed to delete session %s: %s", self.session_id, e)
        finally:
            self._client.close()
