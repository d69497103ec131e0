"""
Exception hierarchy for sheet sync operations.
"""

from pathlib import Path
from typing import Optional


class SyncError(Exception):
    """Base exception for sync operations."""

    pass


class ConfigurationError(SyncError):
    """Exception raised for configuration-related errors."""

    pass


class NoSourcesConfigured(ConfigurationError):
    """Raised when none of the sheet URLs is set."""

    def __init__(self, env_vars):
        self.env_vars = list(env_vars)
        super().__init__(
            "No Google Sheet URLs provided. "
            f"Set at least one of: {', '.join(self.env_vars)}"
        )


class TransportError(SyncError):
    """
    Raised when a sheet cannot be downloaded.

    Covers DNS, connection and timeout failures as well as any response
    whose status is not 200. For status failures ``status_code`` and
    ``reason`` hold the server's answer.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.reason = reason


class WriteError(SyncError):
    """Raised when an output file cannot be serialized or written."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class SyncFailed(SyncError):
    """
    Raised by the orchestrator when a source fails.

    Carries the failing source name and the report collected up to that
    point; the underlying error is chained as ``__cause__``.
    """

    def __init__(self, source: str, report, error: Exception):
        super().__init__(f"{source}: {error}")
        self.source = source
        self.report = report
        self.error = error
