"""Read-only view of a Composer project on disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .errors import ConfigurationError, PackageNotFoundError
from .schemas.packages import CorePackageRef

logger = logging.getLogger(__name__)

MANIFEST_NAME = "composer.json"
DEFAULT_VENDOR_DIR = "vendor"


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"{path} is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise ConfigurationError(f"Cannot read {path}: {exc}") from exc


class ComposerProject:
    """Root manifest plus the installed-package registry of one project."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root).resolve()
        self._manifest: dict[str, Any] | None = None

    def reload(self) -> None:
        """Forget the cached manifest so the next read hits the disk."""
        self._manifest = None

    @property
    def manifest_path(self) -> Path:
        return self.root / MANIFEST_NAME

    def manifest(self) -> dict[str, Any]:
        if self._manifest is None:
            if not self.manifest_path.is_file():
                self._manifest = {}
            else:
                data = _load_json(self.manifest_path)
                if not isinstance(data, dict):
                    raise ConfigurationError(f"{self.manifest_path} must contain a JSON object.")
                self._manifest = data
        return self._manifest

    def extra(self) -> dict[str, Any]:
        """Return the root package ``extra`` section (empty when absent)."""
        extra = self.manifest().get("extra", {})
        if not isinstance(extra, dict):
            raise ConfigurationError(f"'extra' in {self.manifest_path} must be an object.")
        return extra

    def vendor_dir(self) -> Path:
        config = self.manifest().get("config") or {}
        if not isinstance(config, dict):
            raise ConfigurationError(f"'config' in {self.manifest_path} must be an object.")
        vendor = config.get("vendor-dir") or DEFAULT_VENDOR_DIR
        if not isinstance(vendor, str):
            raise ConfigurationError(
                f"config.vendor-dir in {self.manifest_path} must be a string."
            )
        return self.root / vendor

    @property
    def installed_path(self) -> Path:
        return self.vendor_dir() / "composer" / "installed.json"

    def _installed_packages(self) -> list[dict[str, Any]]:
        if not self.installed_path.is_file():
            logger.debug("No installed registry at %s", self.installed_path)
            return []
        data = _load_json(self.installed_path)
        # Composer 2 wraps the list; Composer 1 stores it bare.
        packages = data.get("packages", []) if isinstance(data, dict) else data
        if not isinstance(packages, list):
            raise ConfigurationError(f"{self.installed_path} has no package list.")
        return [entry for entry in packages if isinstance(entry, dict)]

    def _install_path(self, entry: dict[str, Any]) -> Path:
        relative = entry.get("install-path")
        if isinstance(relative, str) and relative:
            return (self.installed_path.parent / relative).resolve()
        return (self.vendor_dir() / entry["name"]).resolve()

    def find_package(self, name: str) -> CorePackageRef | None:
        """Look up an installed package by name."""
        for entry in self._installed_packages():
            if entry.get("name") != name:
                continue
            version = entry.get("pretty_version") or entry.get("version") or ""
            return CorePackageRef(
                name=name,
                version=str(version),
                install_path=self._install_path(entry),
            )
        return None

    def require_package(self, name: str) -> CorePackageRef:
        package = self.find_package(name)
        if package is None:
            raise PackageNotFoundError(name)
        return package
