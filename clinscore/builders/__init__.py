"""Builders for records derived from templates."""

from clinscore.builders.instance import AssessmentInstance, create_instance

__all__ = ["AssessmentInstance", "create_instance"]
