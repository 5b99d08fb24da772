"""
Core type definitions for credential_plugin.

Provides the step and run result types used by the mutation pipeline to report
what each step did, so callers can tell "nothing to do" from "this run mutated
the project".
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StepStatus(str, Enum):
    """Outcome of a single pipeline step."""

    APPLIED = "applied"
    ALREADY_APPLIED = "already_applied"
    SKIPPED = "skipped"
    FAILED = "failed"

    @property
    def is_fatal(self) -> bool:
        return self is StepStatus.FAILED


class PipelineState(str, Enum):
    """States of the mutation pipeline, in execution order."""

    INIT = "init"
    DEPENDENCIES_PATCHED = "dependencies_patched"
    FILES_GENERATED = "files_generated"
    REGISTRATION_PATCHED = "registration_patched"
    DONE = "done"


class StepOutcome(BaseModel):
    """Result of a pipeline step execution."""

    step: str = Field(description="Name of the pipeline step")
    status: StepStatus = Field(description="Execution status")
    target: str = Field(default="", description="Project-relative file the step touched")
    message: str = Field(default="")
    started_at: datetime = Field(default_factory=_utcnow)
    duration_seconds: float = Field(default=0.0)
    metadata: dict[str, Any] = Field(default_factory=dict)

    def finish(self) -> StepOutcome:
        """Stamp the duration and return self."""
        self.duration_seconds = (_utcnow() - self.started_at).total_seconds()
        return self


class MutationResult(BaseModel):
    """Represents a complete pipeline execution."""

    run_id: str = Field(description="Unique run identifier")
    android_package: str = Field(description="Package the sources were generated for")
    state: PipelineState = Field(default=PipelineState.INIT)
    steps: list[StepOutcome] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=_utcnow)
    completed_at: datetime | None = Field(default=None)
    error: str | None = Field(default=None)
    failed_step: str | None = Field(default=None)

    @property
    def success(self) -> bool:
        return self.state is PipelineState.DONE

    @property
    def changed(self) -> bool:
        """Whether this run mutated anything on disk."""
        return any(step.status is StepStatus.APPLIED for step in self.steps)

    @property
    def warnings(self) -> list[str]:
        return [step.message for step in self.steps if step.status is StepStatus.SKIPPED]

    def get_step(self, name: str) -> StepOutcome | None:
        """Get a step outcome by name."""
        for step in self.steps:
            if step.step == name:
                return step
        return None

    def record(self, outcome: StepOutcome) -> None:
        self.steps.append(outcome.finish())
        if outcome.status.is_fatal:
            self.failed_step = outcome.step
            self.error = outcome.message

    def mark_completed(self) -> None:
        self.completed_at = _utcnow()
