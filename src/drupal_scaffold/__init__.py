"""Drupal scaffold files for Composer-managed projects."""

from .errors import (
    ConfigurationError,
    DownloadFailure,
    PackageNotFoundError,
    ScaffoldError,
    ScaffoldIOError,
)
from .handler import HandlerState, InvocationContext, ScaffoldHandler
from .policy import DELIMITER, DownloadInvocation, ScaffoldPolicy

__all__ = [
    "ConfigurationError",
    "DownloadFailure",
    "PackageNotFoundError",
    "ScaffoldError",
    "ScaffoldIOError",
    "HandlerState",
    "InvocationContext",
    "ScaffoldHandler",
    "DELIMITER",
    "DownloadInvocation",
    "ScaffoldPolicy",
]
