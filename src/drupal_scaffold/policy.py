"""Scaffold policy: when to fetch scaffold files and with which options."""

from __future__ import annotations

import logging
import stat
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import ConfigurationError, ScaffoldIOError
from .schemas.options import EXTRA_KEY, ScaffoldConfig
from .schemas.packages import CorePackageRef, PackageOperation
from .settings import settings

logger = logging.getLogger(__name__)

# Joins include/exclude lists into a single runner argument.
DELIMITER = ","


@dataclass(frozen=True, slots=True)
class DownloadInvocation:
    """Arguments handed to the task runner for one scaffold download."""

    command: str
    version: str
    source: str
    webroot: Path
    excludes: str
    includes: str

    def argv(self) -> list[str]:
        """Render the runner arguments (without the runner binary)."""
        return [
            self.command,
            self.version,
            "--source",
            self.source,
            "--webroot",
            str(self.webroot),
            "--excludes",
            self.excludes,
            "--includes",
            self.includes,
        ]


class ScaffoldPolicy:
    """Decides whether scaffold files are needed and resolves their options."""

    def __init__(self, core_package: str | None = None, command: str | None = None) -> None:
        self.core_package = core_package or settings.core.package
        self.command = command or settings.runner.command

    # ------------------------------------------------------------------
    # Detection
    # ------------------------------------------------------------------
    def detect_core_package(self, operation: PackageOperation) -> CorePackageRef | None:
        """Return the operation's resulting package if it is the core package."""
        package = operation.subject
        if package is not None and package.name == self.core_package:
            logger.debug("Detected %s %s on %s", package.name, package.version, operation.kind.value)
            return package
        return None

    @staticmethod
    def webroot_for(core_package: CorePackageRef) -> Path:
        """Web root is the parent of the core install path."""
        return Path(core_package.install_path).parent

    def has_existing_scaffold(self, webroot: Path, includes: Iterable[str]) -> bool:
        """Return True if any include resolves to an existing regular file.

        Directory entries never count. A missing path (or web root) is not an
        error; any other stat failure raises ScaffoldIOError.
        """
        for include in includes:
            # Entries are always relative to the web root, even with a leading slash.
            candidate = Path(webroot) / include.lstrip("/")
            try:
                mode = candidate.stat().st_mode
            except (FileNotFoundError, NotADirectoryError):
                continue
            except OSError as exc:
                raise ScaffoldIOError(exc.errno, exc.strerror, str(candidate)) from exc
            if stat.S_ISREG(mode):
                logger.debug("Found scaffold file %s", candidate)
                return True
        return False

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def resolve_config(self, raw_extra: Mapping[str, Any] | None) -> ScaffoldConfig:
        """Layer the manifest's ``drupal-scaffold`` section over the defaults."""
        if raw_extra is None:
            return ScaffoldConfig()
        if not isinstance(raw_extra, Mapping):
            raise ConfigurationError(
                f"Manifest extra must be a mapping, got {type(raw_extra).__name__}."
            )

        section = raw_extra.get(EXTRA_KEY)
        if section is None:
            return ScaffoldConfig()
        if not isinstance(section, Mapping):
            raise ConfigurationError(
                f"extra.{EXTRA_KEY} must be a mapping, got {type(section).__name__}."
            )

        try:
            return ScaffoldConfig.model_validate(dict(section))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid extra.{EXTRA_KEY}: {exc}") from exc

    def resolve_includes(self, raw_extra: Mapping[str, Any] | None) -> list[str]:
        return self.resolve_config(raw_extra).effective_includes

    def resolve_excludes(self, raw_extra: Mapping[str, Any] | None) -> list[str]:
        return self.resolve_config(raw_extra).effective_excludes

    # ------------------------------------------------------------------
    # Decision and invocation
    # ------------------------------------------------------------------
    @staticmethod
    def should_download(core_present: bool, scaffold_present: bool, is_update_flow: bool) -> bool:
        """Installs skip existing scaffolds; updates always re-sync."""
        if not core_present:
            return False
        if is_update_flow:
            return True
        return not scaffold_present

    def build_download_invocation(
        self,
        config: ScaffoldConfig,
        core_package: CorePackageRef,
        webroot: Path,
    ) -> DownloadInvocation:
        return DownloadInvocation(
            command=self.command,
            version=core_package.version,
            source=config.source,
            webroot=Path(webroot),
            excludes=DELIMITER.join(config.effective_excludes),
            includes=DELIMITER.join(config.effective_includes),
        )
