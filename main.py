"""Registry Broker tools - command-line runner

Runs one search or details lookup against the configured broker and prints
the JSON payload the agent would see.

Usage:
    python main.py "code assistant"
    python main.py --protocol mcp --limit 3 "file management"
    python main.py --details "uaid:aid:example;uid=agent-1;registry=demo;proto=mcp"
    python main.py --config registry_broker.yaml --printer plain research
"""

import asyncio
import json
import logging
import os
import sys

from rich.console import Console
from rich.json import JSON

from registry_broker import (
    BrokerConfig,
    RegistryBrokerAgentDetailsTool,
    RegistryBrokerSearchTool,
)

DEFAULT_QUERY = "code assistant"


def _supports_color() -> bool:
    """Whether the terminal can render ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if not sys.stdout.isatty():
        return False
    return os.environ.get("TERM", "") != "dumb"


def _pop_option(argv: list[str], flag: str) -> str | None:
    if flag not in argv:
        return None
    idx = argv.index(flag)
    argv.pop(idx)
    if idx < len(argv):
        return argv.pop(idx)
    raise SystemExit(f"{flag} requires a value")


def build_search_input(argv: list[str], protocol: str | None, limit: str | None) -> str:
    """Search tool input: plain text, or JSON when filters are given."""
    query = " ".join(argv) or DEFAULT_QUERY
    if protocol is None and limit is None:
        return query

    payload: dict = {"query": query}
    if protocol is not None:
        payload["protocol"] = protocol
    if limit is not None:
        payload["limit"] = int(limit)
    return json.dumps(payload)


def main():
    argv = sys.argv[1:]

    if "--verbose" in argv:
        argv.remove("--verbose")
        logging.basicConfig(level=logging.DEBUG)

    printer_type = _pop_option(argv, "--printer") or "auto"
    config_path = _pop_option(argv, "--config")
    details_uaid = _pop_option(argv, "--details")
    protocol = _pop_option(argv, "--protocol")
    limit = _pop_option(argv, "--limit")

    config = BrokerConfig.load(config_path)

    if details_uaid is not None:
        output = asyncio.run(RegistryBrokerAgentDetailsTool(config).acall(details_uaid))
    else:
        text = build_search_input(argv, protocol, limit)
        output = asyncio.run(RegistryBrokerSearchTool(config).acall(text))

    use_rich = printer_type == "rich" or (printer_type == "auto" and _supports_color())
    if use_rich:
        Console().print(JSON(output))
    else:
        print(json.dumps(json.loads(output), indent=2, ensure_ascii=False))

    if not json.loads(output)["success"]:
        sys.exit(1)


if __name__ == "__main__":
    main()
