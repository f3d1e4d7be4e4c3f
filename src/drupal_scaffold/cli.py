"""CLI entrypoint for drupal-scaffold."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

import click
import yaml
from dotenv import load_dotenv

from .composer import ComposerProject
from .errors import ScaffoldError
from .handler import ScaffoldHandler
from .policy import ScaffoldPolicy
from .runner import SubprocessTaskRunner
from .schemas.packages import CommandKind, PackageOperation
from .settings import ScaffoldSettings

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


@dataclass(frozen=True, slots=True)
class CliContext:
    """Options shared by all subcommands."""

    project: Path
    settings: ScaffoldSettings

    def handler(self) -> ScaffoldHandler:
        project = ComposerProject(self.project)
        policy = ScaffoldPolicy(
            core_package=self.settings.core.package,
            command=self.settings.runner.command,
        )
        runner = SubprocessTaskRunner(binary=self.settings.runner.binary, cwd=project.root)
        return ScaffoldHandler(project, runner=runner, policy=policy)


@click.group()
@click.version_option(package_name="drupal-scaffold")
@click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    help="Composer project root (contains composer.json)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, project: Path, verbose: bool) -> None:
    """Download Drupal scaffold files into a Composer project's web root."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )
    env_path = project / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)
    ctx.obj = CliContext(project=project, settings=ScaffoldSettings())


@main.command()
@click.pass_obj
def download(obj: CliContext) -> None:
    """Download scaffold files for the installed core package."""
    handler = obj.handler()
    try:
        invocation = handler.download_scaffold()
    except ScaffoldError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Scaffold files for {invocation.version} written to {invocation.webroot}")


@main.command()
@click.option(
    "--flow",
    type=click.Choice([kind.value for kind in CommandKind]),
    required=True,
    help="Replay the post-install or post-update policy",
)
@click.pass_obj
def run(obj: CliContext, flow: str) -> None:
    """Apply the post-command scaffold policy to the installed packages."""
    handler = obj.handler()
    command = CommandKind(flow)
    try:
        package = handler.project.find_package(handler.policy.core_package)
        if package is not None:
            if command is CommandKind.UPDATE:
                operation = PackageOperation.update(None, package)
            else:
                operation = PackageOperation.install(package)
            handler.on_package_operation(operation)
        downloaded = handler.on_command_completed(command)
    except ScaffoldError as exc:
        raise click.ClickException(str(exc)) from exc

    if package is None:
        click.echo(f"{handler.policy.core_package} is not installed; nothing to scaffold")
    elif downloaded:
        click.echo(f"Scaffold files downloaded to {handler.policy.webroot_for(package)}")
    else:
        click.echo("Scaffold files already present; skipped")


@main.command()
@click.pass_obj
def status(obj: CliContext) -> None:
    """Show the core package, web root and scaffold presence."""
    handler = obj.handler()
    try:
        package = handler.core_package()
        present = handler.check_scaffold_files()
    except ScaffoldError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Core package: {package.name} {package.version}")
    click.echo(f"Web root: {handler.webroot()}")
    click.echo(f"Scaffold files present: {'yes' if present else 'no'}")


@main.command()
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    help="Output format",
)
@click.pass_obj
def config(obj: CliContext, output_format: str) -> None:
    """Print the resolved scaffold configuration."""
    handler = obj.handler()
    try:
        resolved = handler.config()
    except ScaffoldError as exc:
        raise click.ClickException(str(exc)) from exc

    data = {
        "source": resolved.source,
        "omit-defaults": resolved.omit_defaults,
        "includes": resolved.effective_includes,
        "excludes": resolved.effective_excludes,
    }
    if output_format == "json":
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(yaml.safe_dump(data, sort_keys=False), nl=False)


if __name__ == "__main__":
    main()
