"""Pydantic models for the ``drupal-scaffold`` manifest section."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

EXTRA_KEY = "drupal-scaffold"

DEFAULT_SOURCE = "http://ftp.drupal.org/files/projects/drupal-{version}.tar.gz"

DEFAULT_EXCLUDES: tuple[str, ...] = (
    ".gitkeep",
    "autoload.php",
    "composer.json",
    "composer.lock",
    "core",
    "drush",
    "example.gitignore",
    "LICENSE.txt",
    "README.txt",
    "vendor",
    "themes",
    "profiles",
    "modules",
    "sites/*",
    "sites/default/*",
)

DEFAULT_INCLUDES: tuple[str, ...] = (
    "sites",
    "sites/default",
    "sites/default/default.settings.php",
    "sites/default/default.services.yml",
    "sites/development.services.yml",
    "sites/example.settings.local.php",
    "sites/example.sites.php",
)


class ScaffoldConfig(BaseModel):
    """Scaffold options from the manifest, layered over the defaults.

    ``includes`` and ``excludes`` hold the user entries only; the
    ``effective_*`` properties apply ``omit-defaults``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    omit_defaults: bool = Field(
        default=False,
        alias="omit-defaults",
        description="Drop the default include and exclude lists",
    )
    excludes: tuple[str, ...] = Field(
        default=(),
        description="Paths never copied from the distribution",
    )
    includes: tuple[str, ...] = Field(
        default=(),
        description="Paths always copied from the distribution",
    )
    source: str = Field(
        default=DEFAULT_SOURCE,
        description="Download URL template containing {version}",
    )

    @field_validator("excludes", "includes", mode="before")
    @classmethod
    def _wrap_single_path(cls, value):
        # A lone string is accepted as a one-entry list.
        if isinstance(value, str):
            return (value,)
        return value

    @property
    def effective_includes(self) -> list[str]:
        return self._layered(DEFAULT_INCLUDES, self.includes)

    @property
    def effective_excludes(self) -> list[str]:
        return self._layered(DEFAULT_EXCLUDES, self.excludes)

    def _layered(self, defaults: tuple[str, ...], entries: tuple[str, ...]) -> list[str]:
        if self.omit_defaults:
            return list(entries)
        return [*defaults, *entries]
