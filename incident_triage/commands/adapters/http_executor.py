"""
HTTP Command Executor.

Sends each command to a remote executor endpoint that speaks the
`{"command": ...}` -> `{"output": ...}` contract (this service's own
POST /execute, or a gateway in front of the SDN controller).
"""

import logging
from typing import Optional

import httpx

from ...exceptions import ExecutorFailure
from ..interface import CommandExecutor

logger = logging.getLogger(__name__)


class HttpCommandExecutor(CommandExecutor):
    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            url: Full URL of the execute endpoint.
            timeout: Request timeout in seconds. Timeouts surface as ExecutorFailure.
            client: Optional pre-built client (tests inject one with a MockTransport).
        """
        self.url = url
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def execute(self, command: str) -> str:
        client = self._get_client()
        try:
            response = await client.post(self.url, json={"command": command})
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            logger.error(f"Executor timed out for '{command}': {e}")
            raise ExecutorFailure(command, f"timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            logger.error(f"Executor returned {e.response.status_code} for '{command}'")
            raise ExecutorFailure(command, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Executor transport error for '{command}': {e}")
            raise ExecutorFailure(command, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise ExecutorFailure(command, "response is not valid JSON") from e

        if not isinstance(payload, dict) or not isinstance(payload.get("output"), str):
            raise ExecutorFailure(command, "response has no 'output' field")
        return payload["output"]

    async def close(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None
