# Tools Package
from tools.base import Tool, ToolResult
from tools.registry import ToolRegistry, bootstrap_tools
from tools.weather import WeatherTool

__all__ = ["Tool", "ToolResult", "ToolRegistry", "bootstrap_tools", "WeatherTool"]
