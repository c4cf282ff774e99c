"""Exceptions raised by the external actions of a scaffolding run."""

from __future__ import annotations


class ScaffoldError(Exception):
    """Raised when a delegated external action (git, installer, README) fails."""

    def __init__(self, message: str, command: str = "", stderr: str = "") -> None:
        self.command = command
        self.stderr = stderr
        super().__init__(message)


class CloneError(ScaffoldError):
    """Raised when the template repository cannot be cloned."""


class InstallError(ScaffoldError):
    """Raised when a dependency install exits non-zero."""


class ReadmeError(ScaffoldError):
    """Raised when README generation fails."""
