"""
Execution Layer - Runbook Orchestration and Step Resolution

Defines the RunController (deterministic state machine), the Transition
Resolver and the Expectation Evaluator that together execute a guide.
"""

from incident_triage.execution.controller import DEFAULT_STEP_BUDGET, RunController
from incident_triage.execution.evaluator import matches
from incident_triage.execution.schemas.state_machine import Resolution
from incident_triage.execution.transitions import resolve


__all__ = [
    "DEFAULT_STEP_BUDGET",
    "Resolution",
    "RunController",
    "matches",
    "resolve",
]
