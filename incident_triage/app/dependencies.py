"""
Dependency Injection Wiring (Composition Root).

This module acts as the central "container" for the application's services.
It is responsible for:
1. Instantiating the core Singleton services (Repositories, Executor, Controller).
2. Wiring them together (e.g., injecting the Executor into the RunController).
3. Managing the lifecycle of these objects using @lru_cache so they are
   created only once per application process.

Tests replace any of these through app.dependency_overrides.
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends

from ..config import settings
from ..commands.interface import CommandExecutor
from ..commands.adapters.http_executor import HttpCommandExecutor
from ..commands.adapters.mock_executor import MockCommandExecutor
from ..data.sample_guides import SAMPLE_GUIDES
from ..execution.controller import RunController
from ..llm.interface import LLMProvider
from ..llm.adapters.openai_adapter import OpenAIAdapter
from ..repositories.guide import GuideRepository, InMemoryGuideRepository, DatabaseGuideRepository
from ..repositories.incident import (
    IncidentUpdateStore,
    InMemoryIncidentUpdateStore,
    DatabaseIncidentUpdateStore,
)
from ..repositories.run import RunRepository, InMemoryRunRepository
from ..services.summarizer import SummarizerService
from ..services.triage import TriageService
from ..infrastructure.database.connection import init_db

logger = logging.getLogger(__name__)


# Mock executor (backs POST /execute and local runs)
@lru_cache()
def get_mock_executor() -> MockCommandExecutor:
    return MockCommandExecutor()


# Command Executor (Singleton)
@lru_cache()
def get_command_executor() -> CommandExecutor:
    if settings.EXECUTOR_URL:
        return HttpCommandExecutor(
            url=settings.EXECUTOR_URL,
            timeout=settings.EXECUTOR_TIMEOUT_SECONDS,
        )
    return get_mock_executor()


# LLM Provider (Singleton, None when not configured)
@lru_cache()
def get_llm_provider() -> Optional[LLMProvider]:
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY not set, AI summaries are disabled")
        return None
    return OpenAIAdapter(
        api_key=settings.OPENAI_API_KEY,
        model_name=settings.OPENAI_MODEL,
        base_url=settings.OPENAI_BASE_URL,
    )


# Guide Repository (Singleton)
@lru_cache()
def get_guide_repository() -> GuideRepository:
    if settings.STORAGE_BACKEND == "database":
        init_db()
        return DatabaseGuideRepository()
    return InMemoryGuideRepository(SAMPLE_GUIDES.values())


# Incident Update Store (Singleton)
# Note: In-memory storage must be a singleton so records persist across requests!
@lru_cache()
def get_incident_store() -> IncidentUpdateStore:
    if settings.STORAGE_BACKEND == "database":
        init_db()
        return DatabaseIncidentUpdateStore()
    return InMemoryIncidentUpdateStore()


# Run Repository (Singleton, always in-memory)
@lru_cache()
def get_run_repository() -> RunRepository:
    return InMemoryRunRepository()


@lru_cache()
def get_run_controller(
    executor: CommandExecutor = Depends(get_command_executor),
) -> RunController:
    return RunController(executor=executor, step_budget=settings.RUN_STEP_BUDGET)


@lru_cache()
def get_summarizer(
    llm: Optional[LLMProvider] = Depends(get_llm_provider),
) -> SummarizerService:
    return SummarizerService(llm_provider=llm, temperature=settings.LLM_TEMPERATURE)


# The Triage Service (Singleton Service)
@lru_cache()
def get_triage_service(
    guide_repo: GuideRepository = Depends(get_guide_repository),
    run_repo: RunRepository = Depends(get_run_repository),
    incident_store: IncidentUpdateStore = Depends(get_incident_store),
    controller: RunController = Depends(get_run_controller),
    summarizer: SummarizerService = Depends(get_summarizer),
) -> TriageService:
    """
    Injects all necessary components into the TriageService.
    """
    return TriageService(
        guide_repository=guide_repo,
        run_repository=run_repo,
        incident_store=incident_store,
        controller=controller,
        summarizer=summarizer,
    )


async def close_command_executor():
    """
    Releases the singleton executor's HTTP client at application shutdown.
    Does nothing if the executor was never built.
    """
    if get_command_executor.cache_info().currsize == 0:
        return
    executor = get_command_executor()
    if isinstance(executor, HttpCommandExecutor):
        await executor.close()
        logger.info("Closed HTTP command executor")
    get_command_executor.cache_clear()
