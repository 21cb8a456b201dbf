"""Async HTTP client for the Registry Broker search API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import BrokerConfig
from .models import SearchQuery, SearchResponse

logger = logging.getLogger(__name__)


class RegistryBrokerError(Exception):
    """The broker answered with a non-success HTTP status."""

    def __init__(self, status_code: int):
        super().__init__(f"Registry Broker API error: {status_code}")
        self.status_code = status_code


class RegistryBrokerClient:
    """
    Registry Broker search client

    Every call opens its own ``httpx.AsyncClient`` and issues exactly one
    GET request. Nothing is retried or cached.

    Usage:
        client = RegistryBrokerClient(BrokerConfig())
        response = await client.search(SearchQuery(query="code review agent"))
        for hit in response.agents:
            print(hit.normalize().name)
    """

    def __init__(
        self,
        config: BrokerConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            config: Broker location and timeout. Defaults to the public broker.
            transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
        """
        self._config = config or BrokerConfig()
        self._transport = transport

    @property
    def config(self) -> BrokerConfig:
        return self._config

    async def search(self, query: SearchQuery) -> SearchResponse:
        """Run one ``/search`` request.

        Raises:
            RegistryBrokerError: The broker returned a non-2xx status.
            httpx.HTTPError: The request could not be completed.
            pydantic.ValidationError: The body does not look like a search response.
        """
        params = query.to_params()
        logger.debug("GET %s params=%s", self._config.search_url, params)

        async with httpx.AsyncClient(
            timeout=self._config.timeout,
            transport=self._transport,
        ) as client:
            response = await client.get(self._config.search_url, params=params)

        if not response.is_success:
            logger.warning(
                "Registry Broker search failed: status=%s query=%r",
                response.status_code,
                query.query,
            )
            raise RegistryBrokerError(response.status_code)

        body: Any = response.json()
        result = SearchResponse.model_validate(body)
        logger.debug("Registry Broker returned %d hit(s), total=%s", len(result.agents), result.total)
        return result
