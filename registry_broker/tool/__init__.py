"""Tool abstraction the registry tools plug into."""

from .types import AgentTool, ToolResult

__all__ = [
    "AgentTool",
    "ToolResult",
]
