"""
Transition Types - Resolver Output Definitions

Type definitions for the result of resolving a step's outgoing edge.
Used by the resolver (to report the decision) and the run controller
(to advance the pointer and write the log).
"""

from dataclasses import dataclass
from typing import Optional

END = "END"


@dataclass(frozen=True)
class Resolution:
    """
    Where the run goes after a step.

    Attributes:
        next_step_id: The step to run next, or None to terminate.
        decision_log: Log line describing the outcome and the next id.
        matched: Pattern outcome, or None if the step had no pattern.
    """

    next_step_id: Optional[str]
    decision_log: str
    matched: Optional[bool] = None

    @property
    def is_terminal(self) -> bool:
        return self.next_step_id is None
