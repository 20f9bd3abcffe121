"""
Incident Triage

An incident-response runbook executor: walks a guide of troubleshooting
steps, runs diagnostic commands, branches on their output and keeps a log
that can be summarized into a verdict and recorded against the incident.
"""

from incident_triage.domain import (
    Guide,
    Step,
    load_guide,
    rows_from_csv,
)
from incident_triage.state import (
    Incident,
    IncidentUpdate,
    RunState,
    RunStatus,
)
from incident_triage.commands import (
    CommandExecutor,
    HttpCommandExecutor,
    MockCommandExecutor,
)
from incident_triage.execution import Resolution, RunController, matches, resolve

__all__ = [
    # Domain Layer
    "Guide",
    "Step",
    "load_guide",
    "rows_from_csv",
    # State Layer
    "Incident",
    "IncidentUpdate",
    "RunState",
    "RunStatus",
    # Commands Layer
    "CommandExecutor",
    "HttpCommandExecutor",
    "MockCommandExecutor",
    # Execution Layer
    "Resolution",
    "RunController",
    "matches",
    "resolve",
]
