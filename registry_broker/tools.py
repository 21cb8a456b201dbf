"""Registry Broker tools - universal AI agent discovery.

Two agent tools backed by the Registry Broker search API, which indexes
agents from NANDA, MCP, OpenRouter, A2A, Virtuals, and more:

- ``registry_broker_search``: find agents by free text or a JSON query
- ``registry_broker_agent_details``: fetch one agent by its UAID

Both tools return a JSON string that always carries a ``success`` flag.
Errors never propagate out of a tool call; they become
``{"success": false, "error": "..."}``.

Usage:
    from registry_broker import create_registry_broker_tools

    search, details = create_registry_broker_tools()
    print(await search.acall("code review agent"))
    print(await details.acall("uaid:aid:example;uid=agent-1;registry=demo;proto=mcp"))
"""

from __future__ import annotations

import json
import logging
from abc import abstractmethod
from typing import Any

import httpx

from .client import RegistryBrokerClient
from .config import DEFAULT_BASE_URL, BrokerConfig
from .models import SearchQuery
from .tool import AgentTool, ToolResult

logger = logging.getLogger(__name__)

NO_AGENTS_MESSAGE = "No agents found matching your criteria"
AGENT_NOT_FOUND = "Agent not found"
UNKNOWN_ERROR = "Unknown error occurred"


def _dumps(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False)


def _error_payload(exc: Exception) -> str:
    return _dumps({"success": False, "error": str(exc) or UNKNOWN_ERROR})


class _RegistryBrokerTool(AgentTool):
    """Shared plumbing: one client per tool, JSON string in, JSON string out."""

    # Name of the single string parameter in parameters_schema
    _input_name: str = "input"

    def __init__(
        self,
        base_url: str | BrokerConfig = DEFAULT_BASE_URL,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        config = base_url if isinstance(base_url, BrokerConfig) else BrokerConfig(base_url=base_url)
        self._client = RegistryBrokerClient(config, transport=transport)

    @property
    def base_url(self) -> str:
        return self._client.config.base_url

    @abstractmethod
    async def acall(self, text: str) -> str:
        """Run the tool on raw text input and return the JSON payload."""
        raise NotImplementedError

    def call(self, text: str) -> str:
        """Synchronous ``acall``."""
        result = self.run(**{self._input_name: text})
        return result.output  # type: ignore[return-value]

    async def arun(self, **kwargs: Any) -> ToolResult:
        output = await self.acall(kwargs[self._input_name])
        payload = json.loads(output)
        return ToolResult(
            success=payload["success"],
            output=output,
            error=payload.get("error", ""),
        )


class RegistryBrokerSearchTool(_RegistryBrokerTool):
    """Search for AI agents across protocols."""

    @property
    def name(self) -> str:
        return "registry_broker_search"

    @property
    def description(self) -> str:
        return """Search for AI agents across multiple protocols using Registry Broker.
Use this tool when you need to find specialized AI agents for specific tasks.
The Registry Broker indexes agents from NANDA, MCP, OpenRouter, A2A, Virtuals, and more.

Input is either plain search text or a JSON object with:
- query: What kind of agent are you looking for? (e.g., "code review agent", "research assistant")
- protocol: (optional) Filter by specific protocol
- capability: (optional) Filter by capability type
- limit: (optional) Number of results (default: 5)"""

    @property
    def parameters_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "input": {
                    "type": "string",
                    "description": "Search text, or a JSON object with query/protocol/capability/limit",
                },
            },
            "required": ["input"],
        }

    async def acall(self, text: str) -> str:
        try:
            query = SearchQuery.parse_input(text)
            results = await self._client.search(query)

            hits = results.agents
            if not hits:
                return _dumps({
                    "success": True,
                    "message": NO_AGENTS_MESSAGE,
                    "agents": [],
                })

            return _dumps({
                "success": True,
                "total": results.total,
                "agents": [hit.normalize().model_dump() for hit in hits],
            })
        except Exception as e:
            logger.warning("registry_broker_search failed: %s: %s", type(e).__name__, e)
            return _error_payload(e)


class RegistryBrokerAgentDetailsTool(_RegistryBrokerTool):
    """Look up a single agent by UAID."""

    _input_name = "uaid"

    @property
    def name(self) -> str:
        return "registry_broker_agent_details"

    @property
    def description(self) -> str:
        return """Get detailed information about a specific AI agent by its UAID (Universal Agent ID).
Use this after searching to get full details about an agent before interacting with it.

Input: The UAID of the agent (e.g., "uaid:aid:example;uid=agent-1;registry=demo;proto=mcp")"""

    @property
    def parameters_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "uaid": {
                    "type": "string",
                    "description": "The UAID of the agent",
                },
            },
            "required": ["uaid"],
        }

    async def acall(self, text: str) -> str:
        try:
            results = await self._client.search(SearchQuery(query=text.strip(), limit=1))

            hits = results.agents
            if not hits:
                return _dumps({"success": False, "error": AGENT_NOT_FOUND})

            return _dumps({"success": True, "agent": hits[0].to_details()})
        except Exception as e:
            logger.warning("registry_broker_agent_details failed: %s: %s", type(e).__name__, e)
            return _error_payload(e)


def create_registry_broker_tools(
    base_url: str | BrokerConfig = DEFAULT_BASE_URL,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[AgentTool]:
    """Create the search and details tools bound to one broker.

    Args:
        base_url: Broker API root, or a full ``BrokerConfig``.
        transport: Optional httpx transport shared by both tools.

    Returns:
        ``[RegistryBrokerSearchTool, RegistryBrokerAgentDetailsTool]``
    """
    return [
        RegistryBrokerSearchTool(base_url, transport=transport),
        RegistryBrokerAgentDetailsTool(base_url, transport=transport),
    ]
