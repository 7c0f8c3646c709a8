"""Factories for the two kinds of tool an agent can call.

A *text* tool receives one free-form string. A *structured* tool receives
named, typed fields declared by a pydantic model; LangChain validates the
model's arguments against that schema before the tool body runs, so a bad
payload never reaches the function.
"""

from pydantic import BaseModel, Field
from langchain_core.tools import BaseTool, StructuredTool

import inspect
from typing import Any, Callable, NamedTuple


class TextInput(BaseModel):
    input: str = Field(default="", description="Free-form text input for the tool.")


class ToolDescriptor(NamedTuple):
    """What the model sees of a tool: its name, contract and argument schema."""
    name: str
    description: str
    schema: dict[str, Any]


def describe(tool: BaseTool) -> ToolDescriptor:
    return ToolDescriptor(name=tool.name, description=tool.description, schema=dict(tool.args))


def text_tool(name: str, description: str, func: Callable[[str], Any]) -> StructuredTool:
    """Wrap ``func(text) -> result`` as a tool taking a single free-text input."""
    if inspect.iscoroutinefunction(func):
        async def _arun(input: str = "") -> str:
            return str(await func(input))

        return StructuredTool.from_function(
            coroutine=_arun, name=name, description=description, args_schema=TextInput
        )

    def _run(input: str = "") -> str:
        return str(func(input))

    return StructuredTool.from_function(
        func=_run, name=name, description=description, args_schema=TextInput
    )


def structured_tool(
    name: str,
    description: str,
    args_schema: type[BaseModel],
    func: Callable[..., Any],
) -> StructuredTool:
    """Wrap ``func(**fields) -> result`` as a tool validated by ``args_schema``."""
    if inspect.iscoroutinefunction(func):
        return StructuredTool.from_function(
            coroutine=func, name=name, description=description, args_schema=args_schema
        )

    return StructuredTool.from_function(
        func=func, name=name, description=description, args_schema=args_schema
    )
