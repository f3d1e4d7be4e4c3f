"""Plugin-wide settings for drupal-scaffold, read from the environment.

Covers the core package name and the task runner. Project-level options
(includes, excludes, source) live in the manifest ``extra`` section instead.
Every value can be set through a DRUPAL_SCAFFOLD_ environment variable.

Example:
    DRUPAL_SCAFFOLD_CORE__PACKAGE="drupal/core-recommended"
    DRUPAL_SCAFFOLD_RUNNER__BINARY="vendor/bin/robo"
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CoreSettings(BaseSettings):
    """Identification of the package that triggers scaffolding."""

    model_config = SettingsConfigDict(env_prefix="DRUPAL_SCAFFOLD_CORE__")

    package: str = Field(default="drupal/core", description="Core package name")


class RunnerSettings(BaseSettings):
    """External task runner invocation."""

    model_config = SettingsConfigDict(env_prefix="DRUPAL_SCAFFOLD_RUNNER__")

    binary: str = Field(default="robo", description="Task runner executable")
    command: str = Field(
        default="scaffold:download",
        description="Task name passed to the runner",
    )


class ScaffoldSettings(BaseSettings):
    """Root configuration for the scaffold plugin.

    Nested settings use double underscore: DRUPAL_SCAFFOLD_RUNNER__BINARY=robo
    """

    model_config = SettingsConfigDict(
        env_prefix="DRUPAL_SCAFFOLD_",
        env_nested_delimiter="__",
    )

    core: CoreSettings = Field(default_factory=CoreSettings)
    runner: RunnerSettings = Field(default_factory=RunnerSettings)


# Shared by policy and runner defaults
settings = ScaffoldSettings()
