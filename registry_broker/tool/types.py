"""Agent tool base class and result type."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any, TypeAlias, Union

# Basic JSON-serializable values a tool may hand back to the agent
ToolOutput: TypeAlias = Union[bool, str, int, float, list, dict, None]


class ToolResult:
    """Result of one tool execution.

    Attributes:
        success: Whether the tool execution succeeded.
        output: JSON-serializable result. The registry tools put their
                JSON string payload here, on success and on failure.
        error: The error message (if any)
    """

    def __init__(self, success: bool, output: ToolOutput | None = None, error: str = "") -> None:
        self.success = success
        self.output = output
        self.error = error

    def __repr__(self) -> str:
        items = [f"success={self.success}"]
        if self.output:
            items.append(f"output={self.output!r}")
        if self.error:
            items.append(f"error={self.error}")
        return f"ToolResult({', '.join(items)})"


class AgentTool(ABC):
    """Abstract base class for agent tools.

    Subclasses implement ``name``, ``description`` and ``parameters_schema``
    plus at least one of ``run`` (sync) or ``arun`` (async). The other
    direction is bridged automatically.

    Optional attributes:
    - timeout: float | None = None - Execution timeout in seconds
    - tags: tuple[str, ...] = () - Tags for categorization and filtering
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The unique name of the tool used for identification and invocation."""
        raise NotImplementedError

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what the tool does."""
        raise NotImplementedError

    @property
    @abstractmethod
    def parameters_schema(self) -> dict[str, Any]:
        """JSON Schema defining the expected input parameters."""
        raise NotImplementedError

    @property
    def supports_sync(self) -> bool:
        """Whether run() is natively implemented."""
        return self._is_method_overridden("run")

    @property
    def supports_async(self) -> bool:
        """Whether arun() is natively implemented."""
        return self._is_method_overridden("arun")

    timeout: float | None = None

    tags: tuple[str, ...] = ()

    def get_definition(self) -> dict[str, Any]:
        """Tool definition in the shape LLM tool-calling APIs expect."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters_schema,
        }

    def validate_parameters(self, parameters: dict[str, Any]) -> tuple[bool, list[str]]:
        """Validate parameters against JSON Schema."""
        from ._utils import validate_parameters
        return validate_parameters(parameters, self.parameters_schema)

    def _is_method_overridden(self, method_name: str) -> bool:
        return getattr(type(self), method_name) is not getattr(AgentTool, method_name)

    def run(self, **kwargs: Any) -> ToolResult:
        """Execute the tool synchronously."""
        if self._is_method_overridden("arun"):
            try:
                return asyncio.run(self.arun(**kwargs))
            except RuntimeError as e:
                if "cannot be called from a running event loop" in str(e):
                    raise RuntimeError(
                        f"{self.name}: sync run() called from a running event loop, use ainvoke() instead"
                    ) from e
                raise
        raise NotImplementedError(f"{type(self).__name__} must implement run() or arun()")

    async def arun(self, **kwargs: Any) -> ToolResult:
        """Execute the tool asynchronously."""
        if self._is_method_overridden("run"):
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(None, lambda: self.run(**kwargs))
        raise NotImplementedError(f"{type(self).__name__} must implement run() or arun()")

    def invoke(self, parameters: dict[str, Any]) -> ToolResult:
        """Invoke tool synchronously with parameter validation."""
        is_valid, errors = self.validate_parameters(parameters)
        if not is_valid:
            return ToolResult(success=False, error=f"Parameter validation failed: {'; '.join(errors)}")
        try:
            return self.run(**parameters)
        except Exception as e:
            return ToolResult(success=False, error=f"Tool execution failed: {type(e).__name__}: {e}")

    async def ainvoke(self, parameters: dict[str, Any]) -> ToolResult:
        """Invoke tool asynchronously with parameter validation."""
        is_valid, errors = self.validate_parameters(parameters)
        if not is_valid:
            return ToolResult(success=False, error=f"Parameter validation failed: {'; '.join(errors)}")
        try:
            if self.timeout is not None:
                return await asyncio.wait_for(self.arun(**parameters), timeout=self.timeout)
            return await self.arun(**parameters)
        except Exception as e:
            return ToolResult(success=False, error=f"Tool execution failed: {type(e).__name__}: {e}")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"
