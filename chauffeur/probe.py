"""Platform probing: locating executables and the loopback host."""

import functools
import os
import shutil
import socket
import sys
from pathlib import Path
from typing import Optional

from .errors import ChauffeurError, ExecutableNotFoundError


class PlatformProbe:
    """Answers questions about the local machine.

    All members are static so callers (and tests) can patch them on the class.
    """

    @staticmethod
    def windows() -> bool:
        return sys.platform.startswith("win")

    @staticmethod
    def find_binary(*names: str) -> Optional[str]:
        """Return the first of `names` found on PATH, or None."""
        for name in names:
            candidates = [name]
            if PlatformProbe.windows() and not name.lower().endswith(".exe"):
                candidates.append(f"{name}.exe")
            for candidate in candidates:
                found = shutil.which(candidate)
                if found:
                    return found
        return None

    @staticmethod
    def assert_file(path: str) -> bool:
        if not Path(path).is_file():
            raise ExecutableNotFoundError(f"not a file: {path!r}")
        return True

    @staticmethod
    def assert_executable(path: str) -> bool:
        """Raise ExecutableNotFoundError unless `path` is an executable file."""
        PlatformProbe.assert_file(path)
        if not os.access(path, os.X_OK):
            raise ExecutableNotFoundError(f"not executable: {path!r}")
        return True

    @staticmethod
    def localhost() -> str:
        return _resolve_localhost()


@functools.lru_cache(maxsize=1)
def _resolve_localhost() -> str:
    """Translate 'localhost' to its IPv4 address."""
    try:
        info = socket.getaddrinfo("localhost", 80, socket.AF_INET, socket.SOCK_STREAM)
    except socket.gaierror as e:
        raise ChauffeurError("unable to translate 'localhost' for TCP + IPv4") from e
    if not info:
        raise ChauffeurError("unable to translate 'localhost' for TCP + IPv4")
    return info[0][4][0]
