"""Error taxonomy for scaffold resolution and download."""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for all scaffold errors."""


class ConfigurationError(ScaffoldError):
    """The manifest or its ``drupal-scaffold`` extra section is malformed."""


class PackageNotFoundError(ScaffoldError):
    """The core package is not part of the installed dependency set."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Package {name} is not installed.")
        self.name = name


class ScaffoldIOError(ScaffoldError, OSError):
    """Filesystem failure other than a simply missing path."""


class DownloadFailure(ScaffoldError):
    """The task runner failed; its output is kept but not interpreted."""

    def __init__(self, message: str, *, exit_code: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr
