"""Port helpers."""

import socket


def is_free(port: int, host: str = "127.0.0.1") -> bool:
    """Return True if nothing accepts connections on host:port."""
    try:
        socket.create_connection((host, port), 0.2).close()
    except OSError:
        return True
    return False
