"""
Mock executor simulating data center command execution.

Returns canned outputs for a handful of known commands. In production,
point EXECUTOR_URL at a real gateway (see HttpCommandExecutor).
"""

from datetime import datetime, timezone
from typing import Callable

from ..interface import CommandExecutor


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class MockCommandExecutor(CommandExecutor):
    def __init__(self, clock: Callable[[], str] = _now_iso):
        self.clock = clock

    async def execute(self, command: str) -> str:
        return self.respond(command)

    def respond(self, command: str) -> str:
        now = self.clock()
        match str(command or ""):
            case "reset api":
                return f"OK: API reset @ {now}"
            case "get status":
                return f"STATUS: healthy nodes=12 unhealthy=0 ts={now}"
            case "check link":
                return f"LINK: controller=sdn-a path=up jitter=3ms loss=0% ts={now}"
            case _:
                return f"UNKNOWN COMMAND '{command}' @ {now}"
