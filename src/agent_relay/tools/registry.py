"""Tool registry: the ordered catalog of tools one agent may call.

Tools are kept in insertion order and that order is what the model sees,
so ``list_descriptors`` returns the same sequence on every call. A shared
catalog can be narrowed to a per-agent allowlist with ``select``.
"""

from langchain_core.tools import BaseTool

from typing import Iterable, Iterator, Optional

from agent_relay.tools.base import ToolDescriptor, describe
from agent_relay.tools.transfer import TransferTool
from agent_relay.errors import UnknownTool, DuplicateToolName


class ToolRegistry:
    """Maps tool names to tools for a single agent."""

    def __init__(self, tools: Iterable[BaseTool] = ()) -> None:
        self._tools: dict[str, BaseTool] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: BaseTool) -> BaseTool:
        """Add a tool. Raises ``DuplicateToolName`` if the name is taken.

        A registry holds at most one control-transfer tool; a second one is
        rejected the same way as a name clash.
        """
        if tool.name in self._tools:
            raise DuplicateToolName(tool.name)

        if isinstance(tool, TransferTool) and self.transfer_tool() is not None:
            raise DuplicateToolName(tool.name)

        self._tools[tool.name] = tool
        return tool

    def resolve(self, name: str) -> BaseTool:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownTool(name, self.names()) from None

    def select(self, names: Iterable[str]) -> "ToolRegistry":
        """Return a new registry holding ``names`` in the given order."""
        return ToolRegistry(self.resolve(name) for name in names)

    def list_descriptors(self) -> list[ToolDescriptor]:
        return [describe(tool) for tool in self._tools.values()]

    def transfer_tool(self) -> Optional[BaseTool]:
        for tool in self._tools.values():
            if isinstance(tool, TransferTool):
                return tool
        return None

    def tools(self) -> list[BaseTool]:
        return list(self._tools.values())

    def names(self) -> list[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[BaseTool]:
        return iter(self.tools())

    def __len__(self) -> int:
        return len(self._tools)

    def __repr__(self) -> str:
        return f"ToolRegistry({self.names()!r})"
