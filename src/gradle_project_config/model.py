"""Project configuration value types."""

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, model_validator

from .constants import DISTRIBUTION_PREFIX, DISTRIBUTION_SUFFIX, DistributionType
from .workspace import Project


class GradleDistribution(BaseModel):
    """A Gradle distribution, serialized as e.g. ``GRADLE_DISTRIBUTION(VERSION(8.5))``.

    The wrapper distribution carries no configuration; every other type
    needs a non-empty configuration value (path, URI or version).
    """

    model_config = ConfigDict(frozen=True)

    type: DistributionType
    configuration: str | None = None

    @model_validator(mode="after")
    def check_configuration(self) -> "GradleDistribution":
        """Validate that the configuration value matches the distribution type."""
        if self.type == DistributionType.WRAPPER:
            if self.configuration is not None:
                raise ValueError("Wrapper distribution does not take a configuration value")
        elif not self.configuration:
            raise ValueError(f"{self.type.value} distribution requires a configuration value")
        return self

    @classmethod
    def wrapper(cls) -> "GradleDistribution":
        """Distribution using the build's Gradle wrapper."""
        return cls(type=DistributionType.WRAPPER)

    @classmethod
    def from_string(cls, value: str) -> "GradleDistribution":
        """
        Parse a serialized distribution string.

        Args:
            value: String such as GRADLE_DISTRIBUTION(LOCAL_INSTALLATION(/opt/gradle))

        Returns:
            Parsed GradleDistribution

        Raises:
            ValueError: If the string is not a valid distribution
        """
        if not value.startswith(DISTRIBUTION_PREFIX) or not value.endswith(DISTRIBUTION_SUFFIX):
            raise ValueError(f"Invalid Gradle distribution: {value!r}")

        inner = value[len(DISTRIBUTION_PREFIX) : -len(DISTRIBUTION_SUFFIX)]
        if inner == DistributionType.WRAPPER.value:
            return cls.wrapper()

        for distribution_type in DistributionType:
            if distribution_type == DistributionType.WRAPPER:
                continue
            opening = f"{distribution_type.value}("
            if inner.startswith(opening) and inner.endswith(")"):
                return cls(type=distribution_type, configuration=inner[len(opening) : -1])

        raise ValueError(f"Invalid Gradle distribution: {value!r}")

    def to_string(self) -> str:
        """Serialize the distribution."""
        if self.type == DistributionType.WRAPPER:
            inner = self.type.value
        else:
            inner = f"{self.type.value}({self.configuration})"
        return f"{DISTRIBUTION_PREFIX}{inner}{DISTRIBUTION_SUFFIX}"

    def __str__(self) -> str:
        return self.to_string()


class ProjectConfiguration(BaseModel):
    """Full Gradle configuration of a workspace project."""

    model_config = ConfigDict(frozen=True)

    project_dir: Path
    root_project_dir: Path
    project_path: str
    gradle_distribution: GradleDistribution

    def to_properties(self) -> "ProjectConfigurationProperties":
        """Flatten the configuration into its persisted string properties."""
        return ProjectConfigurationProperties.from_values(
            project_path=self.project_path,
            project_dir=str(self.root_project_dir),
            gradle_distribution=self.gradle_distribution.to_string(),
        )


class ProjectConfigurationProperties(BaseModel):
    """Immutable string properties a project configuration is persisted as.

    Attributes:
        project_path: Gradle path of the project within a multi-project build (e.g. ``:sub``)
        project_dir: Directory from which the build connection is established
        gradle_distribution: Serialized Gradle distribution
    """

    model_config = ConfigDict(frozen=True)

    project_path: str
    project_dir: str
    gradle_distribution: str

    @classmethod
    def from_values(
        cls,
        project_path: str | None,
        project_dir: str | None,
        gradle_distribution: str | None,
    ) -> "ProjectConfigurationProperties":
        """
        Create properties from raw values.

        Raises:
            ValueError: If any value is missing
        """
        return cls(
            project_path=project_path,  # type: ignore[arg-type]
            project_dir=project_dir,  # type: ignore[arg-type]
            gradle_distribution=gradle_distribution,  # type: ignore[arg-type]
        )

    def to_project_configuration(self, project: Project) -> ProjectConfiguration:
        """
        Combine the properties with a workspace project.

        A relative project_dir is resolved against the project location.

        Args:
            project: Workspace project the configuration belongs to

        Returns:
            ProjectConfiguration for the project

        Raises:
            ValueError: If the distribution string cannot be parsed
        """
        root_project_dir = Path(self.project_dir)
        if not root_project_dir.is_absolute():
            root_project_dir = Path(os.path.normpath(project.location / root_project_dir))

        return ProjectConfiguration(
            project_dir=project.location,
            root_project_dir=root_project_dir,
            project_path=self.project_path,
            gradle_distribution=GradleDistribution.from_string(self.gradle_distribution),
        )
