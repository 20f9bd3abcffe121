"""
Tests for the command executor adapters.
"""

import httpx
import pytest

from incident_triage.commands import HttpCommandExecutor, MockCommandExecutor
from incident_triage.exceptions import ExecutorFailure

FIXED_TS = "2024-01-01T00:00:00Z"


class TestMockCommandExecutor:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "command, expected",
        [
            ("reset api", f"OK: API reset @ {FIXED_TS}"),
            ("get status", f"STATUS: healthy nodes=12 unhealthy=0 ts={FIXED_TS}"),
            ("check link", f"LINK: controller=sdn-a path=up jitter=3ms loss=0% ts={FIXED_TS}"),
            ("rm -rf /", f"UNKNOWN COMMAND 'rm -rf /' @ {FIXED_TS}"),
        ],
    )
    async def test_canned_outputs(self, command, expected):
        executor = MockCommandExecutor(clock=lambda: FIXED_TS)
        assert await executor.execute(command) == expected

    def test_default_clock_is_iso_utc(self):
        output = MockCommandExecutor().respond("reset api")
        assert output.startswith("OK: API reset @ ")
        assert output.endswith("Z")


def make_executor(handler) -> HttpCommandExecutor:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpCommandExecutor(url="http://executor.test/execute", client=client)


class TestHttpCommandExecutor:
    @pytest.mark.asyncio
    async def test_posts_command_and_returns_output(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = request.content
            return httpx.Response(200, json={"output": "STATUS: healthy"})

        executor = make_executor(handler)
        try:
            assert await executor.execute("get status") == "STATUS: healthy"
        finally:
            await executor.close()

        assert seen["url"] == "http://executor.test/execute"
        assert b'"command"' in seen["body"] and b"get status" in seen["body"]

    @pytest.mark.asyncio
    async def test_non_2xx_is_failure(self):
        executor = make_executor(lambda request: httpx.Response(502, text="bad gateway"))
        with pytest.raises(ExecutorFailure, match="HTTP 502"):
            await executor.execute("get status")

    @pytest.mark.asyncio
    async def test_timeout_is_failure(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        executor = make_executor(handler)
        with pytest.raises(ExecutorFailure, match="timed out"):
            await executor.execute("get status")

    @pytest.mark.asyncio
    async def test_connection_error_is_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        executor = make_executor(handler)
        with pytest.raises(ExecutorFailure) as excinfo:
            await executor.execute("check link")
        assert excinfo.value.command == "check link"

    @pytest.mark.asyncio
    async def test_missing_output_field_is_failure(self):
        executor = make_executor(lambda request: httpx.Response(200, json={"result": "x"}))
        with pytest.raises(ExecutorFailure, match="no 'output'"):
            await executor.execute("get status")

    @pytest.mark.asyncio
    async def test_invalid_json_is_failure(self):
        executor = make_executor(lambda request: httpx.Response(200, text="not json"))
        with pytest.raises(ExecutorFailure, match="not valid JSON"):
            await executor.execute("get status")
