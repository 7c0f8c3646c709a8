from agent_relay.tools.base import TextInput, ToolDescriptor, describe, text_tool, structured_tool
from agent_relay.tools.transfer import (
    EscalateTool,
    EscalateInput,
    TransferTool,
    SwitchDomainTool,
    SwitchDomainInput,
)
from agent_relay.tools.registry import ToolRegistry

__all__ = [
    "TextInput",
    "ToolDescriptor",
    "describe",
    "text_tool",
    "structured_tool",
    "EscalateTool",
    "EscalateInput",
    "TransferTool",
    "SwitchDomainTool",
    "SwitchDomainInput",
    "ToolRegistry",
]
