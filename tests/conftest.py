"""
Shared fixtures: scripted executor, fake LLM and in-memory database.
"""

from typing import Dict, List, Optional

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from incident_triage.commands.interface import CommandExecutor
from incident_triage.domain.loader import load_guide
from incident_triage.exceptions import ExecutorFailure
from incident_triage.infrastructure.database.connection import init_db
from incident_triage.llm.interface import LLMProvider


class ScriptedExecutor(CommandExecutor):
    """Deterministic executor: fixed output per command, optional failures."""

    def __init__(self, outputs: Optional[Dict[str, str]] = None, fail_on: Optional[set] = None):
        self.outputs = outputs or {}
        self.fail_on = fail_on or set()
        self.calls: List[str] = []

    async def execute(self, command: str) -> str:
        self.calls.append(command)
        if command in self.fail_on:
            raise ExecutorFailure(command, "connection refused")
        return self.outputs.get(command, "")


class FakeLLM(LLMProvider):
    """Returns a canned structured response and remembers the request."""

    def __init__(self, verdict: str = "- Root cause: none found\n- Next: close incident"):
        self.verdict = verdict
        self.requests: List[dict] = []

    async def generate_structured_output(self, messages, response_model, temperature=0.0):
        self.requests.append({"messages": messages, "temperature": temperature})
        return response_model(verdict=self.verdict)


@pytest.fixture
def executor():
    return ScriptedExecutor(
        outputs={
            "get status": "STATUS: healthy nodes=12 unhealthy=0",
            "check link": "LINK: controller=sdn-a path=up jitter=3ms loss=0%",
        }
    )


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def link_guide():
    return load_guide(
        [
            {"id": "1", "description": "Check link", "command": "check link",
             "expectPattern": "down", "nextOnNoMatch": "2"},
            {"id": "2", "description": "Link is fine, close out"},
        ],
        name="link",
    )


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()
