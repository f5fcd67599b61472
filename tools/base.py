"""
Tool base class and common types.

Every tool that exposes the mixing challenge engine to an assistant inherits
from MusicalTool and implements execute(). The registry and any tool-calling
front end rely only on this interface.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolParameter:
    """
    Tool parameter specification.

    Attributes:
        name: Parameter name
        type: Python type (str, dict, float, ...)
        description: Human-readable description for tool selection
        required: Whether parameter is required
        default: Default value if not required
    """

    name: str
    type: type
    description: str
    required: bool = True
    default: Any = None

    def validate(self, value: Any) -> tuple[bool, str | None]:
        """
        Validate a parameter value.

        ``float`` parameters also accept ints; bools are never numbers.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if value is None:
            if self.required:
                return False, f"Required parameter '{self.name}' is missing"
            return True, None

        accepted: tuple[type, ...] = (int, float) if self.type is float else (self.type,)
        if isinstance(value, bool) and self.type is not bool:
            ok = False
        else:
            ok = isinstance(value, accepted)
        if not ok:
            return (
                False,
                f"Parameter '{self.name}' must be {self.type.__name__}, got {type(value).__name__}",
            )

        return True, None


@dataclass(frozen=True)
class ToolResult:
    """
    Result from tool execution.

    Attributes:
        success: Whether execution succeeded
        data: Result payload (usually a JSON-ready dict)
        error: Error message if success=False
        metadata: Optional metadata (challenge id, target kind, ...)
    """

    success: bool
    data: Any = None
    error: str | None = None
    metadata: dict[str, Any] | None = None


class MusicalTool(ABC):
    """
    Abstract base class for all tools.

    Tools are deterministic wrappers: they parse plain JSON-style arguments,
    call into core/, and return a ToolResult. They never raise to the caller.

    Subclasses must implement:
        - name: Unique tool identifier
        - description: Clear description for tool selection
        - parameters: List of ToolParameter specs
        - execute(): Core tool logic

    Example:
        class ListMixChallenges(MusicalTool):
            @property
            def name(self) -> str:
                return "list_mix_challenges"

            def execute(self, **kwargs) -> ToolResult:
                return ToolResult(success=True, data={"challenges": [...]})
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique tool identifier (lowercase, underscores)."""

    @property
    @abstractmethod
    def description(self) -> str:
        """
        Human-readable description used for tool selection.

        Say what is scored or listed and what the caller must supply.
        """

    @property
    @abstractmethod
    def parameters(self) -> list[ToolParameter]:
        """List of parameters this tool accepts, required ones first."""

    def validate_inputs(self, **kwargs) -> tuple[bool, str | None]:
        """
        Validate all input parameters.

        Returns:
            Tuple of (is_valid, error_message)
        """
        for param in self.parameters:
            is_valid, error = param.validate(kwargs.get(param.name))
            if not is_valid:
                return False, error

        return True, None

    @abstractmethod
    def execute(self, **kwargs) -> ToolResult:
        """
        Execute tool with validated parameters.

        May raise ValueError for malformed content; __call__ converts it.
        """

    def __call__(self, **kwargs) -> ToolResult:
        """
        Execute tool with automatic validation.

        This is the main entry point: validates inputs, then calls execute().
        Rejected input and ValueErrors become ToolResult(success=False).
        """
        is_valid, error = self.validate_inputs(**kwargs)
        if not is_valid:
            logger.warning("%s rejected input: %s", self.name, error)
            return ToolResult(success=False, error=error)

        try:
            return self.execute(**kwargs)
        except ValueError as e:
            logger.warning("%s rejected input: %s", self.name, e)
            return ToolResult(success=False, error=f"Invalid input: {e}")
        except Exception as e:
            logger.exception("%s failed", self.name)
            return ToolResult(success=False, error=f"Tool execution failed: {e}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize tool (name, description, parameters) for a tool_use API."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": [
                {
                    "name": p.name,
                    "type": p.type.__name__,
                    "description": p.description,
                    "required": p.required,
                    "default": p.default,
                }
                for p in self.parameters
            ],
        }
