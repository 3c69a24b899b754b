"""Library logging and deprecation notices."""

import logging
import sys
from typing import Optional, TextIO

logger = logging.getLogger("chauffeur")
logger.addHandler(logging.NullHandler())

LOG_FORMAT = "%(asctime)s %(levelname)s chauffeur %(message)s"

_ignored: set[str] = set()


def deprecate(old: str, new: Optional[str] = None, id: Optional[str] = None) -> None:
    """Emit a deprecation notice for `old`, pointing at `new` when given."""
    if id is not None and id in _ignored:
        return
    message = f"[DEPRECATION] {old} is deprecated."
    if new:
        message += f" Use {new} instead."
    if id is not None:
        message += f" To silence this warning, call chauffeur.log.ignore({id!r})."
    logger.warning(message)


def ignore(id: str) -> None:
    """Stop emitting deprecation notices tagged with `id`."""
    _ignored.add(id)


def reset_ignored() -> None:
    _ignored.clear()


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Handler:
    """Attach a console handler to the chauffeur logger and return it."""
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
