"""
Controller - Runbook Orchestration Layer

The RunController is the deterministic state machine that walks a Guide
step by step, delegating command execution to a CommandExecutor and
branching decisions to the Transition Resolver.
-----------------------------------------------

A run is strictly sequential: a step's transition depends on its command
output, so the executor call is the only await point. Each iteration:

1. Stop if the caller cancelled the run.
2. Look up the current step (a dangling id ends the run as COMPLETED).
3. Run the step's command, if any, and log command and output.
4. Resolve the next step and log the decision.
5. Count the step; stop as EXHAUSTED once the budget is reached.
6. Advance, or finish as COMPLETED when there is no next step.

Failures are not retried. The run ends as ABORTED and the partial log is kept.
"""

import asyncio
import logging
from typing import Optional

from ..commands.interface import CommandExecutor
from ..domain.models import Guide, Step
from ..exceptions import ExecutorFailure, InvalidPatternError
from ..state.models import RunState, RunStatus
from .schemas.state_machine import Resolution
from .transitions import resolve

logger = logging.getLogger(__name__)

DEFAULT_STEP_BUDGET = 100


class RunController:
    def __init__(self, executor: CommandExecutor, step_budget: int = DEFAULT_STEP_BUDGET):
        if step_budget < 1:
            raise ValueError(f"step_budget must be at least 1, got {step_budget}")
        self.executor = executor
        self.step_budget = step_budget

    async def run(
        self,
        guide: Guide,
        cancel_event: Optional[asyncio.Event] = None,
        state: Optional[RunState] = None,
    ) -> RunState:
        """
        Execute the guide from its entry step until a terminal status.

        Args:
            guide: The (read-only) guide to walk.
            cancel_event: Checked before every step; when set the run stops as CANCELLED.
            state: Pre-created state for callers that observe the log while the run proceeds.

        Returns:
            The RunState with the full log and a terminal status.
        """
        if state is None:
            state = RunState(guide_name=guide.name)

        entry = guide.entry_step()
        if entry is None:
            logger.info(f"Guide '{guide.name}' has no steps, nothing to run")
            state.finish(RunStatus.EMPTY)
            return state

        state.start(entry.id)
        logger.info(f"Run {state.run_id} started for guide '{guide.name}'")

        try:
            while state.status == RunStatus.RUNNING:
                await self._iterate(guide, state, cancel_event)
        except asyncio.CancelledError:
            # The task itself was cancelled (shutdown, dropped request) mid-step
            if not state.status.is_terminal:
                state.append_log(f"Cancelled: run interrupted at step {state.current_step_id}")
                state.finish(RunStatus.CANCELLED)
            logger.warning(f"Run {state.run_id} interrupted after {state.step_count} steps")
            raise

        logger.info(
            f"Run {state.run_id} finished with {state.status.value} after {state.step_count} steps"
        )
        return state

    # ==========================================================================
    # One Iteration
    # ==========================================================================

    async def _iterate(
        self, guide: Guide, state: RunState, cancel_event: Optional[asyncio.Event]
    ):
        # 1. Cancellation between steps
        if cancel_event is not None and cancel_event.is_set():
            state.append_log(f"Cancelled: run stopped before step {state.current_step_id}")
            state.finish(RunStatus.CANCELLED)
            return

        # 2. Load Step (dangling reference == end of guide)
        step = guide.get_step(state.current_step_id)
        if step is None:
            logger.warning(
                f"Run {state.run_id}: step '{state.current_step_id}' not found, treating as end"
            )
            state.current_step_id = None
            state.finish(RunStatus.COMPLETED)
            return

        state.append_log(f"Step {step.id}: {step.description}")

        # 3. Execute Command & 4. Resolve Transition
        try:
            output = await self._execute_command(step, state)
            resolution = resolve(step, output)
        except (ExecutorFailure, InvalidPatternError) as e:
            logger.error(f"Run {state.run_id} aborted at step '{step.id}': {e}")
            state.append_log(f"Error: {e}")
            state.finish(RunStatus.ABORTED, error=str(e))
            return

        state.append_log(resolution.decision_log)

        # 5. Loop protection & 6. Advance
        state.step_count += 1
        self._apply_resolution(state, resolution)

    async def _execute_command(self, step: Step, state: RunState) -> str:
        if not step.command:
            return ""
        try:
            output = await self.executor.execute(step.command)
        except ExecutorFailure:
            raise
        except Exception as e:
            # Any executor error is a transport-level failure for the run
            raise ExecutorFailure(step.command, str(e) or type(e).__name__) from e

        state.append_log(f"$ {step.command}")
        state.append_log(output)
        return output

    def _apply_resolution(self, state: RunState, resolution: Resolution):
        """
        Moves the pointer and translates the resolution into a status.
        The budget check wins over the resolved next id.
        """
        if state.step_count >= self.step_budget:
            state.append_log(f"Stopped: step budget of {self.step_budget} exhausted")
            state.finish(RunStatus.EXHAUSTED)
            return

        state.current_step_id = resolution.next_step_id
        if resolution.is_terminal:
            state.finish(RunStatus.COMPLETED)
