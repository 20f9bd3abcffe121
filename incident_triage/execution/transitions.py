"""
Transition Resolver.

Given a step and the output of its command (empty when no command ran),
decides which step comes next.
"""

from typing import Optional

from ..domain.models import Step
from .evaluator import matches
from .schemas.state_machine import END, Resolution


def resolve(step: Step, output: Optional[str]) -> Resolution:
    """
    Resolve the next step id.

    - With an expectation pattern: match -> next_on_match, otherwise
      next_on_no_match.
    - Without a pattern: next_on_match is the single forward edge.
    A missing next id means the run terminates after this step.

    Raises:
        InvalidPatternError: The step's pattern does not compile.
    """
    if step.expect_pattern:
        matched = matches(step.expect_pattern, output or "")
        next_step_id = step.next_on_match if matched else step.next_on_no_match
        outcome = "match" if matched else "no match"
        return Resolution(
            next_step_id=next_step_id,
            decision_log=f"Decision: {outcome} -> next {next_step_id or END}",
            matched=matched,
        )

    next_step_id = step.next_on_match
    return Resolution(
        next_step_id=next_step_id,
        decision_log=f"Decision: continue -> next {next_step_id or END}",
    )
