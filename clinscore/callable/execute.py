"""Execute interface for the clinscore callable protocol.

Lets an orchestrator score assessments in-process with plain dicts.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Any

from clinscore.callable.result import CallableResult
from clinscore.config import get_template_registry_path, get_template_schema_path
from clinscore.scoring.engine import ScoringEngine
from clinscore.templates.models import AssessmentTemplate
from clinscore.templates.registry import TemplateRegistry

logger = logging.getLogger(__name__)


def execute(params: dict[str, Any]) -> dict[str, Any]:
    """Score one or more response maps against a template.

    Args:
        params: Dictionary containing:
            - template: dict - Inline template document, or
            - template_id: str - Template to load from the registry
            - version: str - Template version (optional, defaults to latest)
            - responses: dict | list[dict] - One response map, or a list of
              response maps
            - config: dict - Optional configuration overrides:
                - template_registry_path: str - Override registry path
                - validate_schema: bool - Check registry templates against
                  the bundled schema (default True)
                - report_date: str - ISO date for the narrative (for
                  reproducible output)

    Returns:
        CallableResult dict with:
            - schema_version: "1.0"
            - items: list[dict] - ScoreResults, in input order
            - stats: dict - Processing statistics

    Raises:
        ValueError: If required parameters are missing or invalid.
        TemplateNotFoundError: If the template is not in the registry.
        UnsupportedScoringMethodError: If the template's scoring method is unknown.
    """
    responses = params.get("responses")
    if responses is None:
        raise ValueError("'responses' is required in params")

    if isinstance(responses, dict):
        response_maps = [responses]
    elif isinstance(responses, list) and all(isinstance(r, dict) for r in responses):
        response_maps = responses
    else:
        raise ValueError("'responses' must be a response map or a list of response maps")

    config = params.get("config") or {}
    template = _resolve_template(params, config)

    report_date = None
    if config.get("report_date"):
        report_date = date.fromisoformat(config["report_date"])

    items: list[dict[str, Any]] = []
    for response_map in response_maps:
        result = ScoringEngine(template, response_map).evaluate(report_date=report_date)
        items.append(result.model_dump(mode="json"))

    logger.debug("Scored %d response maps with %s", len(items), template.name)

    result = CallableResult(
        schema_version="1.0",
        items=items,
        stats={
            "input": len(response_maps),
            "output": len(items),
            "alerts": sum(len(item["alerts"]) for item in items),
        },
    )
    return result.to_dict()


def _resolve_template(params: dict[str, Any], config: dict[str, Any]) -> AssessmentTemplate:
    """Get the template inline or from the registry."""
    inline = params.get("template")
    if inline is not None:
        if isinstance(inline, AssessmentTemplate):
            return inline
        return AssessmentTemplate.model_validate(inline)

    template_id = params.get("template_id")
    if not template_id:
        raise ValueError("Either 'template' or 'template_id' is required in params")

    registry_path = Path(config.get("template_registry_path", get_template_registry_path()))
    schema_path = get_template_schema_path() if config.get("validate_schema", True) else None
    registry = TemplateRegistry(registry_path, schema_path=schema_path)

    version = params.get("version")
    if version:
        return registry.get(template_id, version)
    return registry.get_latest(template_id)
