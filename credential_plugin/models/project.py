"""
Project mutation data models.

These models represent the parts of an Android project the prebuild touches:
Gradle dependency declarations, generated Kotlin sources, patch targets and the
mutable project configuration handle passed in by the build orchestrator.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.types import MutationResult


class GradleDependency(BaseModel):
    """An implementation-scoped Gradle dependency."""

    group: str = Field(description="Group ID")
    artifact: str = Field(description="Artifact ID")
    version: str = Field(default="", description="Version (empty for BOM-managed deps)")

    @property
    def coordinate(self) -> str:
        """Get the "group:artifact" coordinate without a version."""
        return f"{self.group}:{self.artifact}"

    @property
    def notation(self) -> str:
        """Get Gradle dependency notation.

        Returns:
            str: Dependency string in the format "group:artifact:version" or
                "group:artifact" if no version is specified.
        """
        if self.version:
            return f'"{self.coordinate}:{self.version}"'
        return f'"{self.coordinate}"'

    @property
    def declaration(self) -> str:
        """Get full Gradle declaration, e.g. implementation("g:a:v")."""
        return f"implementation({self.notation})"


class GeneratedFile(BaseModel):
    """A generated Kotlin source file, fully rewritten on every run."""

    file_name: str = Field(description="File name without extension")
    package: str = Field(description="Package name")
    content: str = Field(description="Complete file content")

    @property
    def relative_path(self) -> str:
        """Source-root relative directory derived from the package."""
        return self.package.replace(".", "/")

    @property
    def full_name(self) -> str:
        return f"{self.file_name}.kt"


class PatchTarget(BaseModel):
    """A file patched in place, guarded by a detection marker."""

    path: Path = Field(description="Absolute path of the patched file")
    marker: str = Field(description="Substring whose presence means the patch is applied")
    description: str = Field(default="")


class ProjectTargets(BaseModel):
    """Canonical locations of the files the pipeline touches."""

    root: Path = Field(description="Native Android project root")
    descriptor_path: Path = Field(description="app/build.gradle")
    bootstrap_path: Path = Field(description="MainApplication.kt")
    module_dir: Path = Field(description="Directory receiving the generated sources")

    def relative(self, path: Path) -> str:
        """Express a target as a root-relative storage key."""
        return path.relative_to(self.root).as_posix()


class AndroidSection(BaseModel):
    """The android block of the app config."""

    package: str | None = Field(default=None)

    model_config = ConfigDict(extra="allow")


class ModRequest(BaseModel):
    """Where the orchestrator wants native files written."""

    platform_project_root: Path = Field(description="Native project directory")
    platform: str = Field(default="android")


class ProjectConfig(BaseModel):
    """Mutable project configuration handle owned by the build orchestrator."""

    name: str = Field(default="")
    android: AndroidSection = Field(default_factory=AndroidSection)
    mod_request: ModRequest
    plugin_history: list[MutationResult] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")


class PluginProps(BaseModel):
    """Options accepted by the plugin entry point."""

    android_package: str | None = Field(
        default=None,
        alias="androidPackage",
        description="Android package for the generated sources",
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("android_package")
    @classmethod
    def _blank_is_unset(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value
