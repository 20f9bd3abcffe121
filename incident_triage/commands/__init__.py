"""
Commands Layer - Command Executor Clients

Defines the CommandExecutor contract consumed by the run controller and
the adapters that implement it.
"""

from incident_triage.commands.interface import CommandExecutor
from incident_triage.commands.adapters.mock_executor import MockCommandExecutor
from incident_triage.commands.adapters.http_executor import HttpCommandExecutor

__all__ = [
    "CommandExecutor",
    "HttpCommandExecutor",
    "MockCommandExecutor",
]
