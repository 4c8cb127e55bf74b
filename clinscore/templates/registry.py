"""Template registry for loading and caching assessment templates."""

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema
from pydantic import BaseModel, ValidationError

from clinscore.io import load_document
from clinscore.templates.models import AssessmentTemplate

logger = logging.getLogger(__name__)


class TemplateNotFoundError(Exception):
    """Raised when an assessment template is not found."""

    pass


class TemplateValidationError(Exception):
    """Raised when an assessment template fails validation."""

    pass


class TemplateCheck(BaseModel):
    """Result of a structural check on a template document."""

    is_valid: bool
    errors: list[str]


def validate_template(data: dict[str, Any]) -> TemplateCheck:
    """Check that a template document carries the fields an engine needs.

    This is a lighter check than full model validation and is meant for
    template authoring screens, where every problem should be listed at once.

    Args:
        data: Raw template document.

    Returns:
        TemplateCheck listing every missing piece.
    """
    errors: list[str] = []

    if not data.get("name"):
        errors.append("Template name is required")
    if not data.get("abbreviation"):
        errors.append("Template abbreviation is required")
    if not data.get("category"):
        errors.append("Template category is required")
    questions = data.get("questions")
    if not isinstance(questions, list) or len(questions) == 0:
        errors.append("Template must have at least one question")
    if not data.get("scoring_config"):
        errors.append("Scoring configuration is required")
    if not data.get("interpretation_rules"):
        errors.append("Interpretation rules are required")

    return TemplateCheck(is_valid=len(errors) == 0, errors=errors)


class TemplateRegistry:
    """Registry for loading and caching assessment templates.

    Loads templates from a directory structure:
        <registry_path>/templates/<template_id>/<version>.json

    Where version uses dashes instead of dots (e.g., 1-0-0.json for 1.0.0).
    YAML documents (``.yaml``) are accepted alongside JSON.
    """

    SUFFIXES = (".json", ".yaml", ".yml")

    def __init__(
        self,
        registry_path: Path | str,
        schema_path: Path | str | None = None,
    ) -> None:
        """Initialize the template registry.

        Args:
            registry_path: Path to the template registry directory.
            schema_path: Optional path to the template schema for validation.
        """
        self.registry_path = Path(registry_path)
        self.templates_path = self.registry_path / "templates"
        self._cache: dict[tuple[str, str], AssessmentTemplate] = {}
        self._schema: dict | None = None

        if schema_path:
            with open(schema_path) as f:
                self._schema = json.load(f)

    def _version_to_stem(self, version: str) -> str:
        """Convert version string to file stem (1.0.0 -> 1-0-0)."""
        return version.replace(".", "-")

    def _get_template_path(self, template_id: str, version: str) -> Path | None:
        """Get the path to a template file, or None if no file exists."""
        stem = self._version_to_stem(version)
        for suffix in self.SUFFIXES:
            path = self.templates_path / template_id / f"{stem}{suffix}"
            if path.exists():
                return path
        return None

    def get(self, template_id: str, version: str) -> AssessmentTemplate:
        """Get an assessment template by ID and version.

        Args:
            template_id: The template identifier (e.g., 'phq9').
            version: The version string (e.g., '1.0.0').

        Returns:
            The loaded AssessmentTemplate.

        Raises:
            TemplateNotFoundError: If the template file doesn't exist.
            TemplateValidationError: If the template fails schema or model validation.
        """
        cache_key = (template_id, version)
        if cache_key in self._cache:
            return self._cache[cache_key]

        path = self._get_template_path(template_id, version)
        if path is None:
            raise TemplateNotFoundError(
                f"Template not found: {template_id}@{version} "
                f"(expected under {self.templates_path / template_id})"
            )

        try:
            data = load_document(path)
        except ValueError as e:
            raise TemplateValidationError(str(e)) from e
        template = self.parse(data, f"{template_id}@{version}")
        logger.debug("Loaded template %s@%s from %s", template_id, version, path)
        self._cache[cache_key] = template
        return template

    def parse(self, data: dict[str, Any], label: str = "template") -> AssessmentTemplate:
        """Validate a raw template document and build the model.

        Args:
            data: Raw template document.
            label: Name used in error messages.

        Returns:
            The validated AssessmentTemplate.

        Raises:
            TemplateValidationError: If validation fails.
        """
        if self._schema:
            try:
                jsonschema.validate(data, self._schema)
            except jsonschema.ValidationError as e:
                raise TemplateValidationError(
                    f"Template validation failed for {label}: {e.message}"
                ) from e

        try:
            return AssessmentTemplate.model_validate(data)
        except ValidationError as e:
            raise TemplateValidationError(
                f"Template validation failed for {label}: {e}"
            ) from e

    def list_templates(self) -> list[str]:
        """List all available template IDs."""
        if not self.templates_path.exists():
            return []
        return sorted(d.name for d in self.templates_path.iterdir() if d.is_dir())

    def list_versions(self, template_id: str) -> list[str]:
        """List all available versions for a template."""
        template_path = self.templates_path / template_id
        if not template_path.exists():
            return []
        versions = {
            f.stem.replace("-", ".")
            for f in template_path.iterdir()
            if f.suffix in self.SUFFIXES
        }
        return sorted(versions, key=_version_key)

    def get_latest(self, template_id: str) -> AssessmentTemplate:
        """Get the latest version of a template.

        Args:
            template_id: The template identifier.

        Returns:
            The latest AssessmentTemplate.

        Raises:
            TemplateNotFoundError: If no versions exist.
        """
        versions = self.list_versions(template_id)
        if not versions:
            raise TemplateNotFoundError(f"No versions found for template: {template_id}")
        return self.get(template_id, versions[-1])


def _version_key(version: str) -> tuple:
    """Sort key that orders 1.10.0 after 1.9.0."""
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part)
        for part in version.split(".")
    )
