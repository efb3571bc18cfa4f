from abc import ABC, abstractmethod

from schemas.dependencies import WeatherDependencies
from tools.registry import ToolRegistry


class Orchestrator(ABC):
    """
    Reasoning engine contract.

    The engine decides whether, when and how many times to call the tools
    in the registry. Callers must not assume any number or order of calls.
    """

    @abstractmethod
    async def generate(
        self,
        instructions: str,
        dependencies: WeatherDependencies,
        tools: ToolRegistry,
        query: str,
    ) -> str:
        """
        Answer the query.

        Args:
            instructions: System prompt for this request
            dependencies: Dependency bag handed to every tool call
            tools: Tools the engine may call
            query: The user's question

        Returns:
            Final answer text

        Raises:
            OrchestratorError: the engine failed
        """
        pass
