"""CallableResult model for the clinscore callable protocol."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ExecuteStats(BaseModel):
    """Counts for one execute() call."""

    model_config = ConfigDict(extra="forbid")

    input: int = 0
    output: int = 0
    alerts: int = 0


class CallableResult(BaseModel):
    """Result returned by the clinscore execute() interface.

    Scoring is in-process and returns every result inline, so there is no
    external result store to reference.

    Attributes:
        schema_version: Version of the CallableResult schema.
        items: Serialized ScoreResults, one per response map, in input order.
        stats: Response maps read, results written and alerts raised.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = "1.0"
    items: list[dict[str, Any]]
    stats: ExecuteStats = Field(default_factory=ExecuteStats)

    @model_validator(mode="after")
    def check_output_count(self) -> CallableResult:
        """Reject stats whose output count disagrees with the items."""
        if self.stats.output != len(self.items):
            raise ValueError(
                f"stats.output is {self.stats.output} but there are {len(self.items)} items"
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary."""
        return self.model_dump()
