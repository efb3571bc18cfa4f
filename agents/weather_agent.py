"""
Weather Agent

Wires the per-request instructions, the tool registry and the orchestrator.
Stateless across requests: everything request-specific arrives through
`run()` arguments.
"""

import asyncio
import logging

from agents.instructions import build_instructions
from app.core.errors import OrchestratorError
from llm.base import Orchestrator
from schemas.dependencies import WeatherDependencies
from tools.registry import ToolRegistry


logger = logging.getLogger(__name__)


class WeatherAgent:
    """
    Personalized weather answers for one caller at a time.

    The orchestrator decides whether and how often to call the weather
    tool; the whole call is bounded by `timeout_seconds`.
    """

    AGENT_NAME = "WeatherAgent"

    def __init__(
        self,
        orchestrator: Orchestrator,
        tools: ToolRegistry,
        timeout_seconds: float = 60.0,
    ):
        self._orchestrator = orchestrator
        self._tools = tools
        self._timeout_seconds = timeout_seconds

    @property
    def tools(self) -> ToolRegistry:
        return self._tools

    @staticmethod
    def build_query(location: str) -> str:
        return f"What is the weather in {location}?"

    async def run(self, location: str, dependencies: WeatherDependencies) -> str:
        """
        Answer "What is the weather in <location>?" for this caller.

        Raises:
            UpstreamError, ValidationError: the weather tool failed mid-run
            OrchestratorError: engine failure or timeout
        """
        instructions = build_instructions(dependencies)
        query = self.build_query(location)

        logger.info(
            f"[{self.AGENT_NAME}] Query for {dependencies.user_name} "
            f"({dependencies.user_role}): {query}"
        )

        try:
            return await asyncio.wait_for(
                self._orchestrator.generate(instructions, dependencies, self._tools, query),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            raise OrchestratorError(f"Agent timed out after {self._timeout_seconds}s")
