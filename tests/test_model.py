"""Tests for configuration value types."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from gradle_project_config.constants import DistributionType
from gradle_project_config.model import GradleDistribution, ProjectConfiguration, ProjectConfigurationProperties
from gradle_project_config.workspace import Project, Workspace


@pytest.fixture
def project(tmp_path: Path):
    ws = Workspace(tmp_path / "metadata")
    location = tmp_path / "proj"
    location.mkdir()
    yield ws.add_project("proj", location)
    ws.close()


class TestGradleDistribution:
    """Tests for GradleDistribution parsing and serialization."""

    @pytest.mark.parametrize(
        ("value", "expected_type", "expected_configuration"),
        [
            ("GRADLE_DISTRIBUTION(WRAPPER)", DistributionType.WRAPPER, None),
            ("GRADLE_DISTRIBUTION(LOCAL_INSTALLATION(/opt/gradle))", DistributionType.LOCAL_INSTALLATION, "/opt/gradle"),
            (
                "GRADLE_DISTRIBUTION(REMOTE_DISTRIBUTION(https://example.com/gradle-8.5-bin.zip))",
                DistributionType.REMOTE_DISTRIBUTION,
                "https://example.com/gradle-8.5-bin.zip",
            ),
            ("GRADLE_DISTRIBUTION(VERSION(8.5))", DistributionType.VERSION, "8.5"),
        ],
    )
    def test_from_string(
        self, value: str, expected_type: DistributionType, expected_configuration: str | None
    ) -> None:
        """Test parsing each distribution type."""
        distribution = GradleDistribution.from_string(value)

        assert distribution.type == expected_type
        assert distribution.configuration == expected_configuration
        assert distribution.to_string() == value
        assert str(distribution) == value

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "WRAPPER",
            "GRADLE_DISTRIBUTION()",
            "GRADLE_DISTRIBUTION(NIGHTLY)",
            "GRADLE_DISTRIBUTION(VERSION())",
            "GRADLE_DISTRIBUTION(VERSION(8.5)",
            "GRADLE_DISTRIBUTION(WRAPPER(x))",
        ],
    )
    def test_from_string_invalid(self, value: str) -> None:
        """Test that invalid distribution strings raise ValueError."""
        with pytest.raises(ValueError):
            GradleDistribution.from_string(value)

    def test_configuration_required(self) -> None:
        """Test that non-wrapper distributions need a configuration value."""
        with pytest.raises(ValidationError):
            GradleDistribution(type=DistributionType.VERSION)

    def test_wrapper_rejects_configuration(self) -> None:
        """Test that the wrapper distribution takes no configuration value."""
        with pytest.raises(ValidationError):
            GradleDistribution(type=DistributionType.WRAPPER, configuration="8.5")


class TestProjectConfigurationProperties:
    """Tests for ProjectConfigurationProperties."""

    def test_from_values(self) -> None:
        """Test creating properties from raw strings."""
        properties = ProjectConfigurationProperties.from_values(":sub", "/abs/dir", "GRADLE_DISTRIBUTION(WRAPPER)")

        assert properties.project_path == ":sub"
        assert properties.project_dir == "/abs/dir"
        assert properties.gradle_distribution == "GRADLE_DISTRIBUTION(WRAPPER)"

    @pytest.mark.parametrize("missing", ["project_path", "project_dir", "gradle_distribution"])
    def test_missing_value_rejected(self, missing: str) -> None:
        """Test that every value is required."""
        values = {
            "project_path": ":sub",
            "project_dir": "/abs/dir",
            "gradle_distribution": "GRADLE_DISTRIBUTION(WRAPPER)",
            missing: None,
        }

        with pytest.raises(ValueError):
            ProjectConfigurationProperties.from_values(**values)

    def test_immutable(self) -> None:
        """Test that properties cannot be modified."""
        properties = ProjectConfigurationProperties.from_values(":", "/abs/dir", "GRADLE_DISTRIBUTION(WRAPPER)")

        with pytest.raises(ValidationError):
            properties.project_path = ":other"  # type: ignore[misc]

    def test_to_project_configuration(self, project: Project) -> None:
        """Test combining properties with a project."""
        properties = ProjectConfigurationProperties.from_values(
            ":sub", "/abs/dir", "GRADLE_DISTRIBUTION(VERSION(8.5))"
        )

        configuration = properties.to_project_configuration(project)

        assert configuration.project_dir == project.location
        assert configuration.root_project_dir == Path("/abs/dir")
        assert configuration.project_path == ":sub"
        assert configuration.gradle_distribution == GradleDistribution(
            type=DistributionType.VERSION, configuration="8.5"
        )

    def test_to_project_configuration_relative_dir(self, project: Project) -> None:
        """Test that a relative directory resolves against the project location."""
        properties = ProjectConfigurationProperties.from_values(":sub", "..", "GRADLE_DISTRIBUTION(WRAPPER)")

        configuration = properties.to_project_configuration(project)

        assert configuration.root_project_dir == project.location.parent

    def test_to_project_configuration_invalid_distribution(self, project: Project) -> None:
        """Test that an invalid distribution string raises ValueError."""
        properties = ProjectConfigurationProperties.from_values(":", "/abs/dir", "gradle-8.5")

        with pytest.raises(ValueError):
            properties.to_project_configuration(project)

    def test_configuration_to_properties(self, project: Project) -> None:
        """Test flattening a configuration back to its properties."""
        configuration = ProjectConfiguration(
            project_dir=project.location,
            root_project_dir=Path("/abs/dir"),
            project_path=":",
            gradle_distribution=GradleDistribution.wrapper(),
        )

        properties = configuration.to_properties()

        assert properties == ProjectConfigurationProperties.from_values(
            ":", str(Path("/abs/dir")), "GRADLE_DISTRIBUTION(WRAPPER)"
        )
