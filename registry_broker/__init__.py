"""Registry Broker tools for agent frameworks.

Discover AI agents across NANDA, MCP, OpenRouter, A2A, Virtuals, and more
through the Registry Broker universal index.
"""

from .client import RegistryBrokerClient, RegistryBrokerError
from .config import DEFAULT_BASE_URL, BrokerConfig
from .models import NormalizedAgent, SearchHit, SearchQuery, SearchResponse
from .tools import (
    RegistryBrokerAgentDetailsTool,
    RegistryBrokerSearchTool,
    create_registry_broker_tools,
)

__all__ = [
    # Tools
    "RegistryBrokerSearchTool",
    "RegistryBrokerAgentDetailsTool",
    "create_registry_broker_tools",
    # Client
    "RegistryBrokerClient",
    "RegistryBrokerError",
    # Config
    "BrokerConfig",
    "DEFAULT_BASE_URL",
    # Models
    "SearchQuery",
    "SearchHit",
    "SearchResponse",
    "NormalizedAgent",
]
