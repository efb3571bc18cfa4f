"""
LangChain Adapter

Encapsulates all LangChain logic for the weather agent.
Exposes simple Python types only - NO LangChain objects leak out.

DESIGN RULES (LOCK THIS IN):
- LangChain stays INSIDE this module
- The model decides how many tool calls to make; we only cap the rounds
- Typed tool failures (upstream, validation) end the request unchanged
- Unknown tool names go back to the model as ToolResult.fail payloads
- Anything else the engine raises surfaces as OrchestratorError
"""

import json
import logging
import time
from typing import Any, Dict, List, Optional

from langchain_community.callbacks import get_openai_callback
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage, ToolMessage
from langchain_openai import AzureChatOpenAI, ChatOpenAI

from app.core.config import Settings
from app.core.errors import OrchestratorError, WeatherAgentError
from llm.base import Orchestrator
from schemas.dependencies import WeatherDependencies
from tools.base import Tool, ToolResult
from tools.registry import ToolRegistry


logger = logging.getLogger(__name__)


def build_chat_model(settings: Settings) -> BaseChatModel:
    """Get the configured chat model (OpenAI or Azure OpenAI)."""
    if settings.llm_provider == "azure":
        return AzureChatOpenAI(
            azure_deployment=settings.azure_openai_deployment_name,
            openai_api_version=settings.azure_openai_api_version,
            azure_endpoint=settings.azure_openai_endpoint,
            temperature=settings.llm_temperature,
        )
    return ChatOpenAI(
        model=settings.openai_model,
        temperature=settings.llm_temperature,
    )


def _tool_spec(tool: Tool) -> Dict[str, Any]:
    """OpenAI function-calling spec for one of our tools (schema only; we run the call)."""
    return {
        "type": "function",
        "function": {
            "name": tool.name,
            "description": tool.description,
            "parameters": tool.input_schema,
        },
    }


def _message_text(message: BaseMessage) -> str:
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class LangChainOrchestrator(Orchestrator):
    """
    Tool-calling loop over a LangChain chat model.

    1. Bind every registry tool to the model
    2. Invoke the model
    3. Run requested tool calls, append ToolMessages, repeat
    4. Return the first answer without tool calls
    """

    def __init__(
        self,
        settings: Settings,
        llm: Optional[BaseChatModel] = None,
    ):
        """
        Args:
            settings: Model selection and max_tool_rounds
            llm: Optional pre-built chat model (tests inject a mock)
        """
        self._settings = settings
        self._llm = llm
        self._max_tool_rounds = settings.max_tool_rounds

    def _get_llm(self) -> BaseChatModel:
        if self._llm is None:
            self._llm = build_chat_model(self._settings)
        return self._llm

    async def generate(
        self,
        instructions: str,
        dependencies: WeatherDependencies,
        tools: ToolRegistry,
        query: str,
    ) -> str:
        try:
            return await self._generate(instructions, dependencies, tools, query)
        except WeatherAgentError:
            raise
        except Exception as e:
            raise OrchestratorError(str(e) or type(e).__name__) from e

    async def _generate(
        self,
        instructions: str,
        dependencies: WeatherDependencies,
        tools: ToolRegistry,
        query: str,
    ) -> str:
        llm = self._get_llm()
        tool_specs = [_tool_spec(tool) for tool in tools.list_all()]
        llm_with_tools = llm.bind_tools(tool_specs) if tool_specs else llm

        messages: List[BaseMessage] = [
            SystemMessage(content=instructions),
            HumanMessage(content=query),
        ]

        start_time = time.time()
        tokens_used = 0
        tool_calls_log: List[Dict[str, Any]] = []

        for round_number in range(self._max_tool_rounds + 1):
            with get_openai_callback() as cb:
                response = await llm_with_tools.ainvoke(messages)
                tokens_used += cb.total_tokens

            tool_calls = getattr(response, "tool_calls", None) or []
            if not tool_calls:
                latency_ms = int((time.time() - start_time) * 1000)
                logger.info(
                    f"[AGENT] Answered in {latency_ms}ms "
                    f"(tokens={tokens_used}, tool_calls={len(tool_calls_log)})"
                )
                return _message_text(response)

            if round_number == self._max_tool_rounds:
                break

            messages.append(response)
            for tool_call in tool_calls:
                result = await self._call_tool(tools, tool_call, dependencies)
                tool_calls_log.append({
                    "name": tool_call["name"],
                    "input": tool_call.get("args", {}),
                    "success": result.success,
                })
                messages.append(ToolMessage(
                    content=json.dumps(result.model_dump()),
                    tool_call_id=tool_call["id"],
                ))

        raise OrchestratorError(f"Tool call limit reached ({self._max_tool_rounds} rounds)")

    async def _call_tool(
        self,
        tools: ToolRegistry,
        tool_call: Dict[str, Any],
        dependencies: WeatherDependencies,
    ) -> ToolResult:
        name = tool_call["name"]
        tool = tools.get(name)
        if tool is None:
            logger.warning(f"[AGENT] Model requested unknown tool '{name}'")
            return ToolResult.fail(f"Unknown tool: {name}")

        # WeatherAgentError propagates: the route turns it into the error envelope
        output = await tool.execute(tool_call.get("args") or {}, dependencies)
        return ToolResult.ok(output)
