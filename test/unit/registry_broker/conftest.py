"""Shared fixtures: a fake Registry Broker behind httpx.MockTransport."""

import httpx
import pytest


class FakeBroker:
    """Records requests and answers with a canned status/body."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body = {"hits": [], "total": 0, "page": 1, "limit": 5}
        self.raw_body: bytes | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_params(self) -> dict[str, str]:
        return dict(self.requests[-1].url.params)

    def respond_with_hits(self, hits: list[dict], total: int | None = None) -> None:
        self.body = {
            "hits": hits,
            "total": len(hits) if total is None else total,
            "page": 1,
            "limit": 5,
        }


@pytest.fixture
def broker() -> FakeBroker:
    return FakeBroker()


@pytest.fixture
def full_hit() -> dict:
    return {
        "id": "agent-1",
        "uaid": "uaid:aid:example;uid=agent-1;registry=demo;proto=mcp",
        "name": "Code Helper",
        "description": "Reviews pull requests",
        "registry": "demo",
        "capabilities": [1, 4],
        "endpoints": {"primary": "https://agents.test/code-helper", "secondary": "wss://agents.test/ws"},
        "metadata": {"protocol": "mcp", "version": "1.2"},
        "profile": {"display_name": "Profile Name", "description": "Profile description", "tags": ["code"]},
        "lastSeen": "2025-01-02T03:04:05Z",
        "createdAt": "2024-06-01T00:00:00Z",
    }
