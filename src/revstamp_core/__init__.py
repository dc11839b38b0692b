"""Core types for revstamp: errors, configuration, command runner, VCS adapters."""

from .errors import BackendUnavailable, ConfigError, RevisionNotFound, RevstampError, WriteError

__all__ = [
    "BackendUnavailable",
    "ConfigError",
    "RevisionNotFound",
    "RevstampError",
    "WriteError",
]
