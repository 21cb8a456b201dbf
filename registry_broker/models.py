"""Search query and search hit models.

Broker hits are heterogeneous: the same information may sit on the hit
itself or under its ``profile`` / ``metadata`` objects. Every model here
keeps unknown fields so details lookups can pass them through.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
    field_validator,
)

DEFAULT_LIMIT = 5
UNKNOWN_AGENT_NAME = "Unknown Agent"


def _none_on_error(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    try:
        return handler(value)
    except ValidationError:
        return None


# Hit fields used for fallback resolution: a value of the wrong shape
# counts as absent instead of failing the whole response.
LenientStr = Annotated[Optional[str], WrapValidator(_none_on_error)]


class SearchQuery(BaseModel):
    """Structured search tool input."""

    model_config = ConfigDict(strict=True)

    query: str = Field(description="Natural language search query for finding AI agents")
    # null filters are accepted and mean "no filter"
    protocol: Optional[str] = Field(
        default=None,
        description="Filter by protocol: nanda, mcp, openrouter, a2a, virtuals, olas",
    )
    capability: Optional[str] = Field(
        default=None,
        description="Filter by capability: chat, code, research, creative, analysis",
    )
    limit: int = Field(default=DEFAULT_LIMIT, description="Maximum number of results to return")

    @field_validator("limit", mode="before")
    @classmethod
    def _integral_float_limit(cls, value: Any) -> Any:
        # JSON numbers like 3.0 are still whole numbers
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value

    @classmethod
    def parse_input(cls, text: str) -> SearchQuery:
        """Parse tool input, falling back to plain query text.

        ``text`` may be a JSON object matching this model. Anything else,
        including invalid JSON and JSON that fails validation, becomes the
        query text verbatim.
        """
        try:
            return cls.model_validate(json.loads(text))
        except (ValueError, ValidationError, RecursionError):
            return cls(query=text, limit=DEFAULT_LIMIT)

    def to_params(self) -> dict[str, str]:
        """Query string parameters for the ``/search`` endpoint."""
        params = {
            "q": self.query,
            "limit": str(self.limit or DEFAULT_LIMIT),
        }
        if self.protocol:
            params["protocols"] = self.protocol
        if self.capability:
            params["capabilities"] = self.capability
        return params


class _Passthrough(BaseModel):
    model_config = ConfigDict(extra="allow")


class HitProfile(_Passthrough):
    display_name: LenientStr = None
    description: LenientStr = None


class HitMetadata(_Passthrough):
    protocol: LenientStr = None


class HitEndpoints(_Passthrough):
    primary: LenientStr = None


class SearchHit(_Passthrough):
    """One agent listing as returned by the broker."""

    id: Any = None
    uaid: LenientStr = None
    name: LenientStr = None
    description: LenientStr = None
    registry: LenientStr = None
    capabilities: Any = None
    endpoints: Annotated[Optional[HitEndpoints], WrapValidator(_none_on_error)] = None
    metadata: Annotated[Optional[HitMetadata], WrapValidator(_none_on_error)] = None
    profile: Annotated[Optional[HitProfile], WrapValidator(_none_on_error)] = None
    last_seen: Any = Field(default=None, alias="lastSeen")
    created_at: Any = Field(default=None, alias="createdAt")

    @property
    def resolved_name(self) -> Optional[str]:
        return self.name or (self.profile.display_name if self.profile else None) or None

    @property
    def resolved_description(self) -> Optional[str]:
        return self.description or (self.profile.description if self.profile else None) or None

    @property
    def resolved_protocol(self) -> Optional[str]:
        return (self.metadata.protocol if self.metadata else None) or self.registry or None

    @property
    def primary_endpoint(self) -> Optional[str]:
        return (self.endpoints.primary if self.endpoints else None) or None

    def normalize(self) -> NormalizedAgent:
        """Map to the stable search result shape."""
        return NormalizedAgent(
            id=self.id,
            uaid=self.uaid,
            name=self.resolved_name or UNKNOWN_AGENT_NAME,
            description=self.resolved_description or "",
            protocol=self.resolved_protocol,
            capabilities=self.capabilities or [],
            endpoint=self.primary_endpoint,
        )

    def to_details(self) -> dict[str, Any]:
        """Full detail record: normalized fields plus verbatim nested data."""
        return {
            "id": self.id,
            "uaid": self.uaid,
            "name": self.resolved_name,
            "description": self.resolved_description,
            "protocol": self.resolved_protocol,
            "capabilities": self.capabilities,
            "endpoints": _dump(self.endpoints),
            "profile": _dump(self.profile),
            "metadata": _dump(self.metadata),
            "lastSeen": self.last_seen,
            "createdAt": self.created_at,
        }


class NormalizedAgent(BaseModel):
    """Search result entry with every fallback already resolved."""

    id: Any = None
    uaid: Optional[str] = None
    name: str
    description: str
    protocol: Optional[str] = None
    capabilities: Any = Field(default_factory=list)
    endpoint: Optional[str] = None


class SearchResponse(_Passthrough):
    """Body of a ``/search`` response."""

    hits: Optional[list[SearchHit]] = None
    total: Any = None
    page: Any = None
    limit: Any = None

    @field_validator("hits", mode="before")
    @classmethod
    def _skip_non_object_hits(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [hit for hit in value if isinstance(hit, dict)]
        return value

    @property
    def agents(self) -> list[SearchHit]:
        return self.hits or []


def _dump(model: Optional[BaseModel]) -> Optional[dict[str, Any]]:
    if model is None:
        return None
    # Only what the broker actually sent, declared or extra
    present = model.model_fields_set | set(model.model_extra or {})
    return {key: value for key, value in model.model_dump().items() if key in present}
