"""Package and lifecycle event schemas."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator


class OperationKind(str, Enum):
    """Package operations reported by the dependency resolver."""

    INSTALL = "install"
    UPDATE = "update"


class CommandKind(str, Enum):
    """Top-level commands whose completion may trigger scaffolding."""

    INSTALL = "install"
    UPDATE = "update"


class CorePackageRef(BaseModel):
    """An installed package located on disk."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Package name, e.g. drupal/core")
    version: str = Field(description="Pretty version string")
    install_path: Path = Field(description="Absolute installation directory")


class PackageOperation(BaseModel):
    """Single install or update operation.

    Install operations carry ``package``; update operations carry
    ``initial`` and ``target``.
    """

    kind: OperationKind
    package: CorePackageRef | None = None
    initial: CorePackageRef | None = None
    target: CorePackageRef | None = None

    @model_validator(mode="after")
    def _check_shape(self) -> "PackageOperation":
        if self.kind is OperationKind.INSTALL and self.package is None:
            raise ValueError("install operations require a package")
        if self.kind is OperationKind.UPDATE and self.target is None:
            raise ValueError("update operations require a target package")
        return self

    @property
    def subject(self) -> CorePackageRef | None:
        """Package the operation leaves installed."""
        if self.kind is OperationKind.UPDATE:
            return self.target
        return self.package

    @classmethod
    def install(cls, package: CorePackageRef) -> "PackageOperation":
        return cls(kind=OperationKind.INSTALL, package=package)

    @classmethod
    def update(
        cls,
        initial: CorePackageRef | None,
        target: CorePackageRef,
    ) -> "PackageOperation":
        return cls(kind=OperationKind.UPDATE, initial=initial, target=target)
