"""Task runner wiring for scaffold downloads."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from pathlib import Path

from .errors import DownloadFailure
from .policy import DownloadInvocation
from .settings import settings

logger = logging.getLogger(__name__)


class TaskRunner:
    """Base contract for executors of scaffold download invocations."""

    def execute(self, invocation: DownloadInvocation) -> None:
        raise NotImplementedError


class SubprocessTaskRunner(TaskRunner):
    """Runs the task runner CLI synchronously in a child process."""

    def __init__(self, binary: str | None = None, cwd: Path | None = None) -> None:
        self.binary = binary or settings.runner.binary
        self.cwd = cwd
        self._resolved_binary: str | None = None

    def _resolve_binary(self) -> str:
        if self._resolved_binary:
            return self._resolved_binary
        candidate = shutil.which(self.binary) or self.binary
        self._resolved_binary = candidate
        return candidate

    def build_command(self, invocation: DownloadInvocation) -> list[str]:
        return [self._resolve_binary(), *invocation.argv()]

    def execute(self, invocation: DownloadInvocation) -> None:
        cmd = self.build_command(invocation)
        logger.info("Running %s", shlex.join(cmd))

        try:
            result = subprocess.run(
                cmd,
                cwd=self.cwd,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as exc:
            raise DownloadFailure(
                f"Task runner not found: {self.binary}. "
                "Install it or set DRUPAL_SCAFFOLD_RUNNER__BINARY."
            ) from exc
        except OSError as exc:
            raise DownloadFailure(f"Cannot start task runner {self.binary}: {exc}") from exc

        if result.stdout:
            logger.debug(result.stdout.rstrip())
        if result.returncode != 0:
            raise DownloadFailure(
                f"{invocation.command} exited with code {result.returncode}",
                exit_code=result.returncode,
                stderr=result.stderr,
            )
