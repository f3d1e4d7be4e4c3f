"""Lifecycle handler that turns package events into scaffold downloads.

The handler is driven by two callbacks per command invocation:

1. ``on_package_operation`` for every install/update operation. When the
   core package is among them the handler moves to
   ``HandlerState.CORE_PACKAGE_DETECTED``.
2. ``on_command_completed`` once the install/update command finishes. If the
   core package was detected, the download decision is evaluated and the
   handler returns to ``HandlerState.IDLE``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .composer import ComposerProject
from .policy import DownloadInvocation, ScaffoldPolicy
from .runner import SubprocessTaskRunner, TaskRunner
from .schemas.options import ScaffoldConfig
from .schemas.packages import CommandKind, CorePackageRef, PackageOperation

logger = logging.getLogger(__name__)


class HandlerState(str, Enum):
    IDLE = "idle"
    CORE_PACKAGE_DETECTED = "core_package_detected"


@dataclass(slots=True)
class InvocationContext:
    """State scoped to a single install, update or direct command."""

    state: HandlerState = HandlerState.IDLE
    core_package: CorePackageRef | None = None
    config: ScaffoldConfig | None = None
    downloads: list[DownloadInvocation] = field(default_factory=list)


class ScaffoldHandler:
    """Connects a Composer project, the scaffold policy and a task runner."""

    def __init__(
        self,
        project: ComposerProject,
        runner: TaskRunner | None = None,
        policy: ScaffoldPolicy | None = None,
    ) -> None:
        self.project = project
        self.runner = runner or SubprocessTaskRunner(cwd=project.root)
        self.policy = policy or ScaffoldPolicy()
        self.context = InvocationContext()

    def begin_invocation(self) -> InvocationContext:
        """Discard any previous invocation state, including the cached manifest."""
        self.project.reload()
        self.context = InvocationContext()
        return self.context

    @property
    def state(self) -> HandlerState:
        return self.context.state

    # ------------------------------------------------------------------
    # Event callbacks
    # ------------------------------------------------------------------
    def on_package_operation(self, operation: PackageOperation) -> None:
        """Mark scaffolding for processing if the operation touched core."""
        package = self.policy.detect_core_package(operation)
        if package is None:
            return
        self.context.core_package = package
        self.context.state = HandlerState.CORE_PACKAGE_DETECTED

    def on_command_completed(self, command: CommandKind) -> bool:
        """Download scaffold files if core was detected during this command.

        Returns True when a download was performed.
        """
        if self.context.state is not HandlerState.CORE_PACKAGE_DETECTED:
            logger.debug("No core package operation during %s; nothing to do", command.value)
            self.begin_invocation()
            return False

        try:
            is_update = command is CommandKind.UPDATE
            # Presence does not affect the update decision.
            scaffold_present = False if is_update else self.check_scaffold_files()
            if not self.policy.should_download(True, scaffold_present, is_update):
                logger.info("Scaffold files already present; skipping download")
                return False
            self.download_scaffold()
            return True
        finally:
            self.begin_invocation()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def core_package(self) -> CorePackageRef:
        """Return the cached core package, looking it up if necessary."""
        if self.context.core_package is None:
            self.context.core_package = self.project.require_package(self.policy.core_package)
        return self.context.core_package

    def config(self) -> ScaffoldConfig:
        if self.context.config is None:
            self.context.config = self.policy.resolve_config(self.project.extra())
        return self.context.config

    def webroot(self) -> Path:
        return self.policy.webroot_for(self.core_package())

    def check_scaffold_files(self) -> bool:
        """Return True if any scaffold file is already in the web root."""
        return self.policy.has_existing_scaffold(self.webroot(), self.config().effective_includes)

    def download_scaffold(self) -> DownloadInvocation:
        """Hand the download for the current core package to the runner."""
        package = self.core_package()
        invocation = self.policy.build_download_invocation(self.config(), package, self.webroot())
        logger.info("Downloading scaffold files for %s %s", package.name, package.version)
        self.runner.execute(invocation)
        self.context.downloads.append(invocation)
        return invocation
