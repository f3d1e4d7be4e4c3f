"""Shared test fixtures for drupal-scaffold."""

import json
from pathlib import Path

import pytest

from drupal_scaffold.policy import DownloadInvocation
from drupal_scaffold.runner import TaskRunner
from drupal_scaffold.schemas.packages import CorePackageRef


class RecordingRunner(TaskRunner):
    """Task runner stub that records invocations instead of running them."""

    def __init__(self) -> None:
        self.invocations: list[DownloadInvocation] = []

    def execute(self, invocation: DownloadInvocation) -> None:
        self.invocations.append(invocation)


def write_project(
    root: Path,
    *,
    extra: dict | None = None,
    packages: list[dict] | None = None,
) -> Path:
    """Create composer.json and vendor/composer/installed.json under root."""
    manifest: dict = {"name": "acme/site", "require": {"drupal/core": "^10"}}
    if extra is not None:
        manifest["extra"] = extra
    root.mkdir(parents=True, exist_ok=True)
    (root / "composer.json").write_text(json.dumps(manifest, indent=2))

    if packages is not None:
        registry = root / "vendor" / "composer"
        registry.mkdir(parents=True, exist_ok=True)
        (registry / "installed.json").write_text(json.dumps({"packages": packages, "dev": True}))
    return root


CORE_ENTRY = {
    "name": "drupal/core",
    "version": "10.2.3",
    "version_normalized": "10.2.3.0",
    "type": "drupal-core",
    "install-path": "../../web/core",
}


@pytest.fixture
def recording_runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def drupal_project(tmp_path: Path) -> Path:
    """Project with drupal/core installed into web/core and no scaffold files."""
    root = write_project(tmp_path / "site", packages=[CORE_ENTRY])
    (root / "web" / "core").mkdir(parents=True)
    return root


@pytest.fixture
def core_package(tmp_path: Path) -> CorePackageRef:
    core_dir = tmp_path / "web" / "core"
    core_dir.mkdir(parents=True)
    return CorePackageRef(name="drupal/core", version="10.2.3", install_path=core_dir)


@pytest.fixture
def webroot(core_package: CorePackageRef) -> Path:
    return core_package.install_path.parent


@pytest.fixture
def make_project(tmp_path: Path):
    """Factory for Composer projects under tmp_path."""

    def _make(name: str = "project", **kwargs) -> Path:
        return write_project(tmp_path / name, **kwargs)

    return _make


@pytest.fixture
def core_entry() -> dict:
    return dict(CORE_ENTRY)
