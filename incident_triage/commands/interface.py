from abc import ABC, abstractmethod


class CommandExecutor(ABC):
    """
    Abstract Base Class interface that defines the contract for any command
    executor (mock, HTTP gateway, SDN controller RPC, MCP tool, etc.)
    """

    @abstractmethod
    async def execute(self, command: str) -> str:
        """
        Runs a single diagnostic command and returns its full textual output.

        Raises:
            ExecutorFailure: The command could not be run (transport error,
                timeout, malformed response).
        """
        pass
