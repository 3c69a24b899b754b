"""Errors raised by chauffeur."""


class ChauffeurError(Exception):
    """Base class for all chauffeur errors."""


class ConfigError(ChauffeurError):
    """Configuration could not be resolved or is contradictory."""


class ExecutableNotFoundError(ChauffeurError):
    """The driver binary is missing or not executable."""


class ServiceStartError(ChauffeurError):
    """The driver process did not become reachable."""


class SessionError(ChauffeurError):
    """The remote end refused or failed the session handshake."""
