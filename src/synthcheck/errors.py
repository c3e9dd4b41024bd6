from __future__ import annotations

from typing import Any, Optional


class ReconcileError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class ConfigurationError(ReconcileError):
    """Settings problem detected before any network activity; stops the run."""


class LoginFailedError(ReconcileError):
    """The wiki rejected the configured credentials; stops the run."""


class MalformedLineError(ReconcileError):
    """A dataset line does not fit its column schema; the line is skipped."""


class WikiUnavailableError(ReconcileError):
    """The wiki could not be reached or could not list the category; stops the run."""
