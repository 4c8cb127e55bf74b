"""Callable protocol for clinscore."""

from clinscore.callable.execute import execute
from clinscore.callable.result import CallableResult, ExecuteStats

__all__ = ["CallableResult", "ExecuteStats", "execute"]
