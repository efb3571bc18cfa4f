"""
Tool Registry

Explicit tool registration. No auto-discovery: every tool the agent may
call is registered by name and can be introspected (name, description,
input schema, dependencies schema).
"""

from typing import Any, Dict, List, Optional

from clients.openweather import OpenWeatherClient
from tools.base import Tool


class ToolRegistry:
    """
    Name -> Tool lookup handed to the orchestrator.

    Tools are stateless, so one registry is shared by all requests.
    """

    def __init__(self):
        self._tools: Dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """
        Register a tool.

        Raises:
            ValueError: a tool with the same name is already registered
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool

    def get(self, name: str) -> Optional[Tool]:
        """Get a tool by name."""
        return self._tools.get(name)

    def list_all(self) -> List[Tool]:
        """Get all registered tools."""
        return list(self._tools.values())

    def describe(self) -> List[Dict[str, Any]]:
        """Introspectable definitions of every registered tool."""
        return [tool.to_dict() for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


# --- Tool Registration Bootstrap ---

def bootstrap_tools(client: OpenWeatherClient) -> ToolRegistry:
    """
    Build the registry with the default tools.

    Called once at startup.
    """
    from tools.weather import WeatherTool

    registry = ToolRegistry()
    registry.register(WeatherTool(client))
    return registry
