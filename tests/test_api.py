"""
Tests for the FastAPI surface, with services injected via dependency_overrides.
"""

import asyncio
import time

import pytest
from fastapi.testclient import TestClient

from incident_triage.app.dependencies import (
    close_command_executor,
    get_command_executor,
    get_mock_executor,
    get_triage_service,
)
from incident_triage.app.main import app
from incident_triage.commands import CommandExecutor, HttpCommandExecutor, MockCommandExecutor
from incident_triage.config import settings
from incident_triage.data.sample_guides import SAMPLE_GUIDES
from incident_triage.domain.loader import load_guide
from incident_triage.execution import RunController
from incident_triage.repositories.guide import InMemoryGuideRepository
from incident_triage.repositories.incident import InMemoryIncidentUpdateStore
from incident_triage.repositories.run import InMemoryRunRepository
from incident_triage.services.summarizer import SummarizerService
from incident_triage.services.triage import TriageService


def build_service(executor, llm) -> TriageService:
    return TriageService(
        guide_repository=InMemoryGuideRepository(SAMPLE_GUIDES.values()),
        run_repository=InMemoryRunRepository(),
        incident_store=InMemoryIncidentUpdateStore(),
        controller=RunController(executor, step_budget=10),
        summarizer=SummarizerService(llm),
    )


@pytest.fixture
def service(executor, fake_llm):
    return build_service(executor, fake_llm)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_triage_service] = lambda: service
    app.dependency_overrides[get_mock_executor] = lambda: MockCommandExecutor(clock=lambda: "T0")
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestGuideEndpoints:
    def test_create_and_fetch_guide(self, client):
        r = client.post("/guides", json={
            "name": "uploaded",
            "rows": [
                {"id": "1", "description": "Check", "command": "get status",
                 "expectPattern": "healthy", "nextOnMatch": "2"},
                {"description": "Done"},
            ],
        })
        assert r.status_code == 201
        body = r.json()
        assert body["step_count"] == 2
        assert body["steps"][1]["id"] == "2"

        r = client.get("/guides/uploaded")
        assert r.status_code == 200
        assert r.json()["steps"][0]["expect_pattern"] == "healthy"

        assert "uploaded" in client.get("/guides").json()["guides"]

    def test_duplicate_ids_rejected(self, client):
        r = client.post("/guides", json={"name": "dup", "rows": [{"id": "a"}, {"id": "a"}]})
        assert r.status_code == 422
        assert "Duplicate step id 'a'" in r.json()["detail"]

    def test_create_from_csv(self, client):
        r = client.post("/guides/csv", json={"name": "csv", "csv": "id,description\n1,first\n"})
        assert r.status_code == 201
        assert r.json()["name"] == "csv"

    def test_unknown_guide(self, client):
        assert client.get("/guides/nope").status_code == 404


class TestExecuteEndpoint:
    def test_mock_outputs(self, client):
        r = client.post("/execute", json={"command": "get status"})
        assert r.status_code == 200
        assert r.json() == {"output": "STATUS: healthy nodes=12 unhealthy=0 ts=T0"}

    def test_unknown_command(self, client):
        r = client.post("/execute", json={"command": "reboot"})
        assert r.json()["output"] == "UNKNOWN COMMAND 'reboot' @ T0"


class TestRunEndpoints:
    def test_run_and_wait(self, client):
        r = client.post("/runs", json={"guide_name": "sdn_link"})
        assert r.status_code == 200
        body = r.json()
        assert body["status"] == "COMPLETED"
        assert body["verdict"] == "Workflow complete. Review logs and finalize."
        assert body["log"][0] == "Step 1: Check the controller path state."

        fetched = client.get(f"/runs/{body['run_id']}").json()
        assert fetched["log"] == body["log"]

    def test_run_in_background(self, client):
        r = client.post("/runs", json={"guide_name": "api_health", "wait": False})
        assert r.status_code == 202
        run_id = r.json()["run_id"]

        r = client.get(f"/runs/{run_id}")
        assert r.status_code == 200
        assert r.json()["guide_name"] == "api_health"

    def test_unknown_guide(self, client):
        assert client.post("/runs", json={"guide_name": "nope"}).status_code == 404

    def test_unknown_run(self, client):
        assert client.get("/runs/nope").status_code == 404
        assert client.post("/runs/nope/cancel").status_code == 404

    def test_cancel_finished_run(self, client):
        run_id = client.post("/runs", json={"guide_name": "api_health"}).json()["run_id"]
        r = client.post(f"/runs/{run_id}/cancel")
        assert r.status_code == 200
        assert r.json()["status"] == "COMPLETED"

    def test_cancel_background_run_in_progress(self, fake_llm):
        class SlowExecutor(CommandExecutor):
            async def execute(self, command: str) -> str:
                await asyncio.sleep(0.01)
                return "tick"

        guide = load_guide(
            [{"id": "loop", "description": "Poll the controller", "command": "poll",
              "nextOnMatch": "loop"}],
            name="poll_forever",
        )
        service = TriageService(
            guide_repository=InMemoryGuideRepository([guide]),
            run_repository=InMemoryRunRepository(),
            incident_store=InMemoryIncidentUpdateStore(),
            controller=RunController(SlowExecutor(), step_budget=100_000),
            summarizer=SummarizerService(fake_llm),
        )
        app.dependency_overrides[get_triage_service] = lambda: service
        try:
            with TestClient(app) as client:
                run_id = client.post(
                    "/runs", json={"guide_name": "poll_forever", "wait": False}
                ).json()["run_id"]

                deadline = time.monotonic() + 5
                while client.get(f"/runs/{run_id}").json()["step_count"] < 1:
                    assert time.monotonic() < deadline
                    time.sleep(0.01)

                r = client.post(f"/runs/{run_id}/cancel")
                assert r.status_code == 200
                assert r.json()["status"] == "RUNNING"

                body = client.get(f"/runs/{run_id}").json()
                while body["status"] == "RUNNING":
                    assert time.monotonic() < deadline
                    time.sleep(0.01)
                    body = client.get(f"/runs/{run_id}").json()
        finally:
            app.dependency_overrides.clear()

        assert body["status"] == "CANCELLED"
        assert body["log"][-1] == "Cancelled: run stopped before step loop"
        assert body["verdict"] == "Workflow cancelled."


class TestVerdictEndpoints:
    def test_summarize(self, client, fake_llm):
        r = client.post("/ai/summarize", json={
            "incident": {"id": "INC-1", "title": "t", "description": "d"},
            "logs": ["Step 1: x"],
        })
        assert r.status_code == 200
        assert r.json() == {"verdict": fake_llm.verdict}

    def test_summarize_without_key(self, executor):
        app.dependency_overrides[get_triage_service] = lambda: build_service(executor, None)
        try:
            with TestClient(app) as client:
                r = client.post("/ai/summarize", json={"logs": []})
        finally:
            app.dependency_overrides.clear()

        assert r.status_code == 400
        assert r.json() == {"error": "Missing OPENAI_API_KEY"}

    def test_incident_updates(self, client):
        r = client.post("/incidents", json={
            "incident": {"id": "INC-9", "title": "Outage", "description": "All down"},
            "verdict": "Restarted API",
            "logs": ["a", "b"],
        })
        assert r.status_code == 200
        assert r.json() == {"ok": True, "count": 1}

        r = client.post("/incidents", json={})
        assert r.json()["count"] == 2

        updates = client.get("/incidents").json()["updates"]
        assert [u["id"] for u in updates] == ["INC-9", "INC-unknown"]
        assert updates[0]["logs"] == ["a", "b"]


class TestLifespan:
    def test_shutdown_closes_http_executor(self, monkeypatch):
        monkeypatch.setattr(settings, "EXECUTOR_URL", "http://executor.test/execute")
        get_command_executor.cache_clear()
        try:
            executor = get_command_executor()
            assert isinstance(executor, HttpCommandExecutor)
            http_client = executor._get_client()

            with TestClient(app):
                pass

            assert http_client.is_closed
            assert executor._client is None
            assert get_command_executor.cache_info().currsize == 0
        finally:
            get_command_executor.cache_clear()

    @pytest.mark.asyncio
    async def test_close_without_executor_is_noop(self):
        get_command_executor.cache_clear()

        await close_command_executor()

        assert get_command_executor.cache_info().currsize == 0
