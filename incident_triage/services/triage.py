"""
Triage Service - Application Orchestration Layer

This service is the entry point for all triage operations. It orchestrates
the interaction between the Data Layer (Repositories), the Logic Layer
(RunController, Summarizer) and the API: guides are loaded and stored,
runs are started and observed, verdicts are generated and recorded.
"""

import asyncio
import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Set

from ..domain.loader import load_guide, rows_from_csv
from ..domain.models import Guide
from ..execution.controller import RunController
from ..repositories.guide import GuideRepository
from ..repositories.incident import IncidentUpdateStore
from ..repositories.run import RunRepository
from ..state.models import Incident, IncidentUpdate, RunState
from .summarizer import SummarizerService

logger = logging.getLogger(__name__)


class TriageService:
    def __init__(
        self,
        guide_repository: GuideRepository,
        run_repository: RunRepository,
        incident_store: IncidentUpdateStore,
        controller: RunController,
        summarizer: SummarizerService,
    ):
        self.guide_repo = guide_repository
        self.run_repo = run_repository
        self.incident_store = incident_store
        self.controller = controller
        self.summarizer = summarizer

        # Strong references to background runs until they finish
        self._tasks: Set[asyncio.Task] = set()

    # ==========================================================================
    # Guides
    # ==========================================================================

    def import_guide(self, name: str, rows: Iterable[Mapping[str, Any]]) -> Guide:
        """Builds a guide from tabular rows and stores it. Raises DuplicateStepIdError."""
        guide = load_guide(rows, name=name)
        self.guide_repo.save_guide(guide)
        logger.info(f"Imported guide '{guide.name}' with {len(guide)} steps")
        return guide

    def import_guide_csv(self, name: str, csv_text: str) -> Guide:
        return self.import_guide(name, rows_from_csv(csv_text))

    def get_guide(self, name: str) -> Guide:
        return self.guide_repo.get_guide(name)

    def list_guides(self) -> List[str]:
        return self.guide_repo.list_names()

    # ==========================================================================
    # Runs
    # ==========================================================================

    async def run_guide(self, guide_name: str) -> RunState:
        """Runs a guide to completion and returns the finished state."""
        guide = self.guide_repo.get_guide(guide_name)
        state = self.run_repo.create(guide.name)
        return await self._run(guide, state)

    def launch_run(self, guide_name: str) -> RunState:
        """
        Starts a guide in the background (must be called from a running loop).
        The returned state keeps growing; poll get_run() to follow it.
        """
        guide = self.guide_repo.get_guide(guide_name)
        state = self.run_repo.create(guide.name)

        task = asyncio.get_running_loop().create_task(self._run(guide, state))
        self._tasks.add(task)
        task.add_done_callback(self._on_run_done)
        return state

    def get_run(self, run_id: str) -> RunState:
        return self.run_repo.get(run_id)

    def cancel_run(self, run_id: str) -> RunState:
        """Asks a run to stop before its next step. No-op for finished runs."""
        state = self.run_repo.get(run_id)
        if not state.status.is_terminal:
            self.run_repo.cancel_event(run_id).set()
            logger.info(f"Cancellation requested for run {run_id}")
        return state

    async def _run(self, guide: Guide, state: RunState) -> RunState:
        cancel_event = self.run_repo.cancel_event(state.run_id)
        return await self.controller.run(guide, cancel_event=cancel_event, state=state)

    def _on_run_done(self, task: asyncio.Task):
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Background run crashed", exc_info=task.exception())

    # ==========================================================================
    # Verdicts & Incident Updates
    # ==========================================================================

    async def summarize(self, incident: Incident, logs: Sequence[str]) -> str:
        """Raises SummarizerUnavailableError when no LLM is configured."""
        return await self.summarizer.summarize(incident, logs)

    def record_update(
        self, incident: Optional[Incident], verdict: Optional[str], logs: Sequence[str]
    ) -> int:
        """Appends a verdict to the incident record. Returns the record count."""
        update = IncidentUpdate(
            id=incident.id if incident else "INC-unknown",
            title=incident.title if incident else "",
            description=incident.description if incident else "",
            verdict=verdict or "",
            logs=list(logs or []),
        )
        return self.incident_store.append(update)

    def list_updates(self) -> List[IncidentUpdate]:
        return self.incident_store.list_updates()
