"""
Tool registry with automatic discovery.

Scans tools/ for concrete MusicalTool subclasses and registers one instance
of each by name. Adding a tool means adding a module under tools/music/.
"""

import importlib
import inspect
import logging
import pkgutil

from tools.base import MusicalTool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Name → tool lookup with automatic discovery.

    Usage:
        registry = ToolRegistry()
        registry.discover()

        tool = registry.get("evaluate_mix_challenge")
        result = tool(challenge_id="f1-01-warm-it-up", eq={"low": 3, "mid": 0, "high": -3})
    """

    def __init__(self):
        self._tools: dict[str, MusicalTool] = {}

    def register(self, tool: MusicalTool) -> None:
        """
        Register a tool instance.

        Raises:
            ValueError: If a tool with the same name is already registered
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")

        self._tools[tool.name] = tool

    def get(self, name: str) -> MusicalTool | None:
        """Return the tool registered under ``name``, or None."""
        return self._tools.get(name)

    def list_tools(self) -> list[dict]:
        """Return every registered tool serialized with to_dict()."""
        return [tool.to_dict() for tool in self._tools.values()]

    def discover(self, package_name: str = "tools") -> int:
        """
        Import every module under ``package_name`` and register its tools.

        Only classes defined in the scanned module are registered, so a tool
        imported by another module is not picked up twice. Modules that fail
        to import are skipped with a DEBUG log line.

        Returns:
            Number of tools discovered
        """
        try:
            package = importlib.import_module(package_name)
        except ImportError:
            logger.debug("Tool package %s not importable", package_name)
            return 0

        if not hasattr(package, "__path__"):
            return 0

        count = 0
        for _finder, module_name, _is_pkg in pkgutil.walk_packages(
            list(package.__path__), prefix=f"{package_name}."
        ):
            try:
                module = importlib.import_module(module_name)
            except ImportError as e:
                logger.debug("Skipping %s: %s", module_name, e)
                continue

            for _name, obj in inspect.getmembers(module, inspect.isclass):
                if obj is MusicalTool or obj.__module__ != module_name:
                    continue
                if issubclass(obj, MusicalTool) and not inspect.isabstract(obj):
                    tool = obj()
                    if tool.name in self._tools:
                        continue
                    self.register(tool)
                    count += 1

        logger.debug("Discovered %d tools in %s", count, package_name)
        return count

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools


# Global registry instance
_registry: ToolRegistry | None = None


def get_registry() -> ToolRegistry:
    """Return the process-wide registry, discovering tools on first call."""
    global _registry
    if _registry is None:
        _registry = ToolRegistry()
        _registry.discover()
    return _registry
