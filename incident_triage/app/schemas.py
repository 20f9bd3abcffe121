"""
API Layer - Request/Response Schemas

Pydantic models for API request and response validation.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..domain.models import Guide, Step
from ..state.models import Incident, IncidentUpdate, RunState, RunStatus


class GuideCreate(BaseModel):
    name: str = "Guide"
    # Spreadsheet rows: id, description, command, expectPattern, nextOnMatch, nextOnNoMatch
    rows: List[Dict[str, Any]]


class GuideCsvCreate(BaseModel):
    name: str = "Guide"
    csv: str


class StepRead(BaseModel):
    id: str
    description: str
    command: Optional[str] = None
    expect_pattern: Optional[str] = None
    next_on_match: Optional[str] = None
    next_on_no_match: Optional[str] = None

    @classmethod
    def from_step(cls, step: Step) -> "StepRead":
        return cls(
            id=step.id,
            description=step.description,
            command=step.command,
            expect_pattern=step.expect_pattern,
            next_on_match=step.next_on_match,
            next_on_no_match=step.next_on_no_match,
        )


class GuideRead(BaseModel):
    name: str
    step_count: int
    steps: List[StepRead]

    @classmethod
    def from_guide(cls, guide: Guide) -> "GuideRead":
        return cls(
            name=guide.name,
            step_count=len(guide),
            steps=[StepRead.from_step(step) for step in guide.steps],
        )


class GuideList(BaseModel):
    guides: List[str]


class ExecuteRequest(BaseModel):
    command: str = ""


class ExecuteResponse(BaseModel):
    output: str


class RunCreate(BaseModel):
    guide_name: str
    # False starts the run in the background; poll GET /runs/{run_id}
    wait: bool = True


class RunRead(BaseModel):
    run_id: str
    guide_name: str
    status: RunStatus
    current_step_id: Optional[str] = None
    step_count: int
    log: List[str]
    error: Optional[str] = None
    verdict: Optional[str] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    @classmethod
    def from_state(cls, state: RunState) -> "RunRead":
        return cls(
            run_id=state.run_id,
            guide_name=state.guide_name,
            status=state.status,
            current_step_id=state.current_step_id,
            step_count=state.step_count,
            # Copy: the controller may still be appending
            log=list(state.log),
            error=state.error,
            verdict=state.verdict,
            started_at=state.started_at,
            finished_at=state.finished_at,
        )


class SummarizeRequest(BaseModel):
    incident: Incident = Field(default_factory=Incident)
    logs: List[str] = Field(default_factory=list)


class SummarizeResponse(BaseModel):
    verdict: str


class IncidentUpdateRequest(BaseModel):
    incident: Optional[Incident] = None
    verdict: Optional[str] = None
    logs: List[str] = Field(default_factory=list)


class IncidentUpdateResponse(BaseModel):
    ok: bool
    count: int


class IncidentUpdateList(BaseModel):
    updates: List[IncidentUpdate]
