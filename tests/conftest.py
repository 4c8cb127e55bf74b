"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from clinscore.templates import AssessmentTemplate, TemplateRegistry


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def template_registry_path(project_root: Path) -> Path:
    """Return the template registry path."""
    return project_root / "template-registry"


@pytest.fixture
def template_schema_path(project_root: Path) -> Path:
    """Return the assessment template schema path."""
    return project_root / "clinscore" / "schemas" / "assessment_template.schema.json"


@pytest.fixture
def template_registry(
    template_registry_path: Path, template_schema_path: Path
) -> TemplateRegistry:
    """Template registry with schema validation enabled."""
    return TemplateRegistry(template_registry_path, schema_path=template_schema_path)


@pytest.fixture
def phq9_template(template_registry: TemplateRegistry) -> AssessmentTemplate:
    """Load the PHQ-9 template."""
    return template_registry.get("phq9", "1.0.0")


@pytest.fixture
def gad7_template(template_registry: TemplateRegistry) -> AssessmentTemplate:
    """Load the GAD-7 template."""
    return template_registry.get("gad7", "1.0.0")
