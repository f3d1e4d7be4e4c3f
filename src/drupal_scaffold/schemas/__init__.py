"""Pydantic schemas for scaffold options and package events."""

from .options import (
    DEFAULT_EXCLUDES,
    DEFAULT_INCLUDES,
    DEFAULT_SOURCE,
    EXTRA_KEY,
    ScaffoldConfig,
)
from .packages import CommandKind, CorePackageRef, OperationKind, PackageOperation

__all__ = [
    "DEFAULT_EXCLUDES",
    "DEFAULT_INCLUDES",
    "DEFAULT_SOURCE",
    "EXTRA_KEY",
    "ScaffoldConfig",
    "CommandKind",
    "CorePackageRef",
    "OperationKind",
    "PackageOperation",
]
