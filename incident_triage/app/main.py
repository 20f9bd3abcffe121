import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Depends, Response, status
from fastapi.responses import JSONResponse

from ..config import settings
from ..commands.adapters.mock_executor import MockCommandExecutor
from ..exceptions import (
    DuplicateStepIdError,
    GuideNotFoundError,
    RunNotFoundError,
    SummarizerUnavailableError,
)
from ..services.triage import TriageService
from .dependencies import close_command_executor, get_mock_executor, get_triage_service
from .schemas import (
    ExecuteRequest,
    ExecuteResponse,
    GuideCreate,
    GuideCsvCreate,
    GuideList,
    GuideRead,
    IncidentUpdateList,
    IncidentUpdateRequest,
    IncidentUpdateResponse,
    RunCreate,
    RunRead,
    SummarizeRequest,
    SummarizeResponse,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_command_executor()


app = FastAPI(title="Incident Auto-Triage Agent", lifespan=lifespan)

# --- Guides ---

@app.post("/guides", response_model=GuideRead, status_code=status.HTTP_201_CREATED)
def create_guide(
    payload: GuideCreate,
    service: TriageService = Depends(get_triage_service)
):
    """Loads a guide from spreadsheet-style rows."""
    try:
        guide = service.import_guide(payload.name, payload.rows)
    except DuplicateStepIdError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return GuideRead.from_guide(guide)


@app.post("/guides/csv", response_model=GuideRead, status_code=status.HTTP_201_CREATED)
def create_guide_from_csv(
    payload: GuideCsvCreate,
    service: TriageService = Depends(get_triage_service)
):
    """Loads a guide from CSV text (a sheet exported with a header row)."""
    try:
        guide = service.import_guide_csv(payload.name, payload.csv)
    except DuplicateStepIdError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return GuideRead.from_guide(guide)


@app.get("/guides", response_model=GuideList)
def list_guides(service: TriageService = Depends(get_triage_service)):
    return GuideList(guides=service.list_guides())


@app.get("/guides/{name}", response_model=GuideRead)
def get_guide(
    name: str,
    service: TriageService = Depends(get_triage_service)
):
    try:
        return GuideRead.from_guide(service.get_guide(name))
    except GuideNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# --- Command Execution (mock executor) ---

@app.post("/execute", response_model=ExecuteResponse)
async def execute_command(
    request: ExecuteRequest,
    executor: MockCommandExecutor = Depends(get_mock_executor)
):
    """
    Simulates data center command execution.
    In production, integrate with MCP tools or secure RPC to the SDN controller.
    """
    return ExecuteResponse(output=await executor.execute(request.command))


# --- Runs ---

@app.post("/runs", response_model=RunRead)
async def create_run(
    payload: RunCreate,
    response: Response,
    service: TriageService = Depends(get_triage_service)
):
    """
    Runs a guide. With wait=true the finished run is returned; otherwise the
    run starts in the background and 202 is returned with its initial state.
    """
    try:
        if payload.wait:
            state = await service.run_guide(payload.guide_name)
        else:
            state = service.launch_run(payload.guide_name)
            response.status_code = status.HTTP_202_ACCEPTED
    except GuideNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return RunRead.from_state(state)


@app.get("/runs/{run_id}", response_model=RunRead)
def get_run(
    run_id: str,
    service: TriageService = Depends(get_triage_service)
):
    """Current state of a run, including the log so far."""
    try:
        return RunRead.from_state(service.get_run(run_id))
    except RunNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.post("/runs/{run_id}/cancel", response_model=RunRead)
async def cancel_run(
    run_id: str,
    service: TriageService = Depends(get_triage_service)
):
    """Requests the run to stop before its next step."""
    try:
        return RunRead.from_state(service.cancel_run(run_id))
    except RunNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# --- Verdicts & Incidents ---

@app.post("/ai/summarize", response_model=SummarizeResponse)
async def summarize(
    payload: SummarizeRequest,
    service: TriageService = Depends(get_triage_service)
):
    try:
        verdict = await service.summarize(payload.incident, payload.logs)
    except SummarizerUnavailableError as e:
        # Recoverable: the client shows a warning, the run is unaffected
        return JSONResponse(status_code=400, content={"error": str(e)})
    return SummarizeResponse(verdict=verdict)


@app.post("/incidents", response_model=IncidentUpdateResponse)
def update_incident(
    payload: IncidentUpdateRequest,
    service: TriageService = Depends(get_triage_service)
):
    count = service.record_update(payload.incident, payload.verdict, payload.logs)
    return IncidentUpdateResponse(ok=True, count=count)


@app.get("/incidents", response_model=IncidentUpdateList)
def list_incident_updates(service: TriageService = Depends(get_triage_service)):
    return IncidentUpdateList(updates=service.list_updates())
