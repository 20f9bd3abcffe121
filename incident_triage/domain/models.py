"""
Domain Layer - Static Data Models

This module defines the core domain model representing the static structure
of incident runbooks. These dataclasses are built once from tabular source
content (spreadsheet rows, CSV, JSON) and define Guides and Steps.

Guides are immutable after construction, so a single Guide can be shared by
any number of concurrent runs.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ..exceptions import DuplicateStepIdError


@dataclass(frozen=True)
class Step:
    """
    A single node in the runbook graph.

    A step optionally runs a diagnostic command, optionally checks the output
    against an expectation pattern, and names the step(s) to branch to.

    Attributes:
        id: Unique identifier within the guide.
        description: Human-readable instruction text.
        command: Diagnostic command to send to the executor. None means no call.
        expect_pattern: Case-insensitive regex searched in the command output.
        next_on_match: Step to go to on a match, or the default forward edge
            when the step has no pattern.
        next_on_no_match: Step to go to when the pattern does not match.
    """
    id: str
    description: str = ""
    command: Optional[str] = None
    expect_pattern: Optional[str] = None
    next_on_match: Optional[str] = None
    next_on_no_match: Optional[str] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("Step id must be non-empty.")

    @property
    def is_terminal(self) -> bool:
        """True when the step has nothing to run, check or follow."""
        return not (self.command or self.expect_pattern or self.next_on_match)


@dataclass(frozen=True)
class Guide:
    """
    Ordered collection of steps forming a complete runbook.

    The first step is the entry point. The id index is derived once at
    construction for O(1) lookup during a run.

    Attributes:
        name: Display label (the sheet name for spreadsheet guides).
        steps: Steps in source order.
    """
    name: str
    steps: Tuple[Step, ...] = ()
    _index: Dict[str, Step] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # Accept any sequence but store a tuple so the guide stays read-only
        steps = tuple(self.steps)
        index: Dict[str, Step] = {}
        for step in steps:
            if step.id in index:
                raise DuplicateStepIdError(step.id)
            index[step.id] = step
        object.__setattr__(self, "steps", steps)
        object.__setattr__(self, "_index", index)

    def entry_step(self) -> Optional[Step]:
        return self.steps[0] if self.steps else None

    def get_step(self, step_id: Optional[str]) -> Optional[Step]:
        if step_id is None:
            return None
        return self._index.get(step_id)

    def __len__(self) -> int:
        return len(self.steps)
