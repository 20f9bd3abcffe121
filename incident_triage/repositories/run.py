import asyncio
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Dict

from ..exceptions import RunNotFoundError
from ..state.models import RunState

# Finished runs kept for callers that poll after the end of a run
DEFAULT_MAX_FINISHED_RUNS = 100


class RunRepository(ABC):
    """
    Holds the runs of the current process so callers can follow a run's log
    while it proceeds and ask it to stop. Runs are not persisted across restarts.
    """

    @abstractmethod
    def create(self, guide_name: str) -> RunState:
        """Creates a new IDLE run with a unique ID."""
        pass

    @abstractmethod
    def get(self, run_id: str) -> RunState:
        """Retrieves a run. Raises RunNotFoundError if unknown."""
        pass

    @abstractmethod
    def cancel_event(self, run_id: str) -> asyncio.Event:
        """The cancellation signal the controller checks for this run."""
        pass


class InMemoryRunRepository(RunRepository):
    """
    Uses in-memory dictionaries; must be a process singleton so runs stay
    visible across requests.

    Only the most recent `max_finished_runs` terminal runs are retained;
    older finished runs (and their cancel events) are evicted on create().
    Runs that are still in progress are never evicted.
    """

    def __init__(self, max_finished_runs: int = DEFAULT_MAX_FINISHED_RUNS):
        if max_finished_runs < 0:
            raise ValueError(f"max_finished_runs must be >= 0, got {max_finished_runs}")
        self.max_finished_runs = max_finished_runs
        self._runs: "OrderedDict[str, RunState]" = OrderedDict()
        self._cancel_events: Dict[str, asyncio.Event] = {}

    def create(self, guide_name: str) -> RunState:
        self._evict_finished()
        run = RunState(guide_name=guide_name)
        self._runs[run.run_id] = run
        self._cancel_events[run.run_id] = asyncio.Event()
        return run

    def get(self, run_id: str) -> RunState:
        run = self._runs.get(run_id)
        if run is None:
            raise RunNotFoundError(f"Run '{run_id}' not found.")
        return run

    def cancel_event(self, run_id: str) -> asyncio.Event:
        self.get(run_id)
        return self._cancel_events[run_id]

    def __len__(self) -> int:
        return len(self._runs)

    def _evict_finished(self):
        finished = [run_id for run_id, run in self._runs.items() if run.status.is_terminal]
        # Oldest first, thanks to insertion order
        excess = len(finished) - self.max_finished_runs
        for run_id in finished[:max(excess, 0)]:
            del self._runs[run_id]
            del self._cancel_events[run_id]
