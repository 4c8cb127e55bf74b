"""Validation layer for completeness and response shape checks."""

from clinscore.validation.checks import ResponseValidationResult, Validator, is_empty

__all__ = ["ResponseValidationResult", "Validator", "is_empty"]
