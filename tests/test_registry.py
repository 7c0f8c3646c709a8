"""
Tests for the tool registry and the tool factories.
"""

import pytest
from pydantic import BaseModel, ValidationError

from agent_relay.errors import UnknownTool, DuplicateToolName, ConfigurationError
from agent_relay.tools import (
    EscalateTool,
    ToolRegistry,
    SwitchDomainTool,
    text_tool,
    structured_tool,
)


class OrderInput(BaseModel):
    item: str
    quantity: int


def _echo(text: str) -> str:
    return text


def _order(item: str, quantity: int) -> str:
    return f"{quantity} x {item}"


class TestToolRegistry:
    """Registration, lookup and listing."""

    def test_register_and_resolve(self):
        echo = text_tool("echo", "Echo the input.", _echo)
        registry = ToolRegistry([echo])
        assert registry.resolve("echo") is echo
        assert "echo" in registry
        assert len(registry) == 1

    def test_duplicate_name_rejected(self):
        registry = ToolRegistry([text_tool("echo", "Echo the input.", _echo)])
        with pytest.raises(DuplicateToolName) as exc:
            registry.register(text_tool("echo", "Another echo.", _echo))
        assert exc.value.name == "echo"
        assert isinstance(exc.value, ConfigurationError)
        assert registry.names() == ["echo"]

    def test_unknown_name_lists_available_tools(self):
        registry = ToolRegistry([text_tool("echo", "Echo the input.", _echo)])
        with pytest.raises(UnknownTool) as exc:
            registry.resolve("shout")
        assert exc.value.name == "shout"
        assert exc.value.available == ["echo"]

    def test_descriptors_keep_registration_order(self):
        registry = ToolRegistry([
            text_tool("b_tool", "Second letter.", _echo),
            text_tool("a_tool", "First letter.", _echo),
            structured_tool("order", "Place an order.", OrderInput, _order),
        ])
        first = [d.name for d in registry.list_descriptors()]
        second = [d.name for d in registry.list_descriptors()]
        assert first == ["b_tool", "a_tool", "order"]
        assert first == second

    def test_descriptor_carries_schema(self):
        registry = ToolRegistry([
            text_tool("echo", "Echo the input.", _echo),
            structured_tool("order", "Place an order.", OrderInput, _order),
        ])
        echo, order = registry.list_descriptors()
        assert echo.description == "Echo the input."
        assert list(echo.schema) == ["input"]
        assert set(order.schema) == {"item", "quantity"}

    def test_select_builds_allowlist_in_given_order(self):
        catalog = ToolRegistry([
            text_tool("a", "A.", _echo),
            text_tool("b", "B.", _echo),
            text_tool("c", "C.", _echo),
        ])
        selected = catalog.select(["c", "a"])
        assert selected.names() == ["c", "a"]
        assert catalog.names() == ["a", "b", "c"]

    def test_select_unknown_name_raises(self):
        catalog = ToolRegistry([text_tool("a", "A.", _echo)])
        with pytest.raises(UnknownTool):
            catalog.select(["a", "z"])

    def test_at_most_one_transfer_tool(self):
        registry = ToolRegistry([EscalateTool()])
        with pytest.raises(DuplicateToolName):
            registry.register(SwitchDomainTool.for_domains({"shopping": "online shopping"}))
        assert isinstance(registry.transfer_tool(), EscalateTool)

    def test_transfer_tool_absent(self):
        registry = ToolRegistry([text_tool("echo", "Echo the input.", _echo)])
        assert registry.transfer_tool() is None


class TestToolFactories:
    """Text and structured tools run through LangChain's tool interface."""

    @pytest.mark.asyncio
    async def test_text_tool_sync_function(self):
        echo = text_tool("echo", "Echo the input.", str.upper)
        assert await echo.ainvoke({"input": "hello"}) == "HELLO"

    @pytest.mark.asyncio
    async def test_text_tool_async_function(self):
        async def shout(text: str) -> str:
            return text + "!"

        tool = text_tool("shout", "Shout the input.", shout)
        assert await tool.ainvoke({"input": "hey"}) == "hey!"

    @pytest.mark.asyncio
    async def test_structured_tool_validates_before_running(self):
        calls = []

        def order(item: str, quantity: int) -> str:
            calls.append((item, quantity))
            return "ok"

        tool = structured_tool("order", "Place an order.", OrderInput, order)
        assert await tool.ainvoke({"item": "shirt", "quantity": 2}) == "ok"
        assert calls == [("shirt", 2)]


class TestTransferTools:
    """Schemas of the control-transfer tools."""

    def test_switch_domain_description_lists_domains(self):
        tool = SwitchDomainTool.for_domains({
            "shopping": "online shopping",
            "banking": "online banking",
        })
        assert "'shopping': online shopping" in tool.description
        assert "'banking': online banking" in tool.description
        assert tool.domains == {"shopping": "online shopping", "banking": "online banking"}

    def test_switch_domain_payload_stripped(self):
        payload = SwitchDomainTool().parse({"domain": " shopping ", "summary": "buy a shirt"})
        assert payload.domain == "shopping"
        assert payload.summary == "buy a shirt"

    def test_blank_summary_rejected(self):
        with pytest.raises(ValidationError):
            EscalateTool().parse({"summary": "   "})

    def test_transfer_tool_body_never_runs(self):
        with pytest.raises(ConfigurationError):
            EscalateTool().invoke({"summary": "help"})
