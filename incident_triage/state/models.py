"""
State Layer - Runtime Data Models

This module defines the runtime state of a single runbook execution. A
RunState is owned by exactly one run; the controller is its only writer,
while an API caller may read the log as it grows.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RunStatus(str, Enum):
    """
    Lifecycle of a run.

    IDLE: Created, not started (an empty guide never leaves this state for RUNNING).
    RUNNING: Walking the guide.
    COMPLETED: Reached a step with no next step (or a dangling reference).
    ABORTED: The executor failed or a pattern was invalid.
    EXHAUSTED: The step budget was reached.
    CANCELLED: The caller asked the run to stop.
    EMPTY: The guide had no steps; nothing was run.
    """
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    ABORTED = "ABORTED"
    EXHAUSTED = "EXHAUSTED"
    CANCELLED = "CANCELLED"
    EMPTY = "EMPTY"

    @property
    def is_terminal(self) -> bool:
        return self not in (RunStatus.IDLE, RunStatus.RUNNING)


VERDICTS = {
    RunStatus.COMPLETED: "Workflow complete. Review logs and finalize.",
    RunStatus.ABORTED: "Workflow aborted due to error.",
    RunStatus.EXHAUSTED: "Workflow stopped: step budget exhausted (possible loop in guide).",
    RunStatus.CANCELLED: "Workflow cancelled.",
    RunStatus.EMPTY: "Guide has no steps.",
}


class Incident(BaseModel):
    """
    The incident being triaged. Owned by the caller, passed through unchanged.
    """
    id: str = "INC-001"
    title: str = ""
    description: str = ""


class RunState(BaseModel):
    """
    The state of one execution of a guide.
    """
    run_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    guide_name: str
    status: RunStatus = RunStatus.IDLE
    current_step_id: Optional[str] = None
    step_count: int = 0
    log: List[str] = Field(default_factory=list)
    error: Optional[str] = None

    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    def append_log(self, line: str):
        # Single append: readers see either the old or the new list length
        self.log.append(line)

    def start(self, entry_step_id: str):
        self.status = RunStatus.RUNNING
        self.current_step_id = entry_step_id
        self.started_at = _utcnow()

    def finish(self, status: RunStatus, error: Optional[str] = None):
        self.status = status
        self.error = error
        self.finished_at = _utcnow()

    @property
    def verdict(self) -> Optional[str]:
        """Default human-readable verdict for a finished run."""
        return VERDICTS.get(self.status)


class IncidentUpdate(BaseModel):
    """
    One append-only record of a verdict posted against an incident.
    """
    id: str = "INC-unknown"
    title: str = ""
    description: str = ""
    verdict: str = ""
    logs: List[str] = Field(default_factory=list)
    ts: datetime = Field(default_factory=_utcnow)
