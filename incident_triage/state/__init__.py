"""
State Layer - Runtime Data Models

Defines the runtime state model that tracks a single execution of a guide:
the current step, the accumulated log and the terminal status.
"""

from incident_triage.state.models import (
    Incident,
    IncidentUpdate,
    RunState,
    RunStatus,
)

__all__ = [
    "Incident",
    "IncidentUpdate",
    "RunState",
    "RunStatus",
]
