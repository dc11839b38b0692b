"""Exception hierarchy for revstamp."""

from __future__ import annotations


class RevstampError(Exception):
    """Base class for all revstamp errors."""


class BackendUnavailable(RevstampError):
    """The backend command could not be started, failed, or printed nothing."""

    def __init__(self, backend: str, message: str):
        self.backend = backend
        super().__init__(f"{backend}: {message}")


class RevisionNotFound(RevstampError):
    """The backend ran fine but its output carried no revision."""


class WriteError(RevstampError):
    """The output file could not be written."""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class ConfigError(RevstampError):
    """Configuration file is unreadable or invalid."""
