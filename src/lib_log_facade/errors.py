"""Exception taxonomy raised by the logging façade."""

from __future__ import annotations


class LogFacadeError(Exception):
    """Base class for errors surfaced to callers of :mod:`lib_log_facade`."""


class ConfigurationError(LogFacadeError):
    """Raised for invalid logger options or a capability the logger was not configured with."""


__all__ = ["ConfigurationError", "LogFacadeError"]
