"""Control-transfer pseudo-tools.

These tools are advertised to the model like any other tool, but an agent
never runs their body: it hands the validated payload to the dispatcher,
which moves control and returns the receiving agent's reply as the tool
result. The generalist only ever receives ``switch_domain`` and specialists
only ever receive ``escalate``.
"""

from langchain_core.tools import BaseTool
from pydantic import BaseModel, Field, field_validator

from typing import Any, ClassVar

from agent_relay.errors import ConfigurationError
from agent_relay.constants import SWITCH_DOMAIN_TOOL_NAME, ESCALATE_TOOL_NAME


def _not_blank(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


class EscalateInput(BaseModel):
    summary: str = Field(
        description="Short summary of the relevant context, written for the general assistant."
    )

    @field_validator("summary")
    @classmethod
    def summary_not_blank(cls, value: str) -> str:
        return _not_blank(value)


class SwitchDomainInput(BaseModel):
    domain: str = Field(description="Name of the domain to hand the conversation to.")
    summary: str = Field(
        description="Short summary of the relevant context, written for the domain specialist."
    )

    @field_validator("domain", "summary")
    @classmethod
    def fields_not_blank(cls, value: str) -> str:
        return _not_blank(value)


class TransferTool(BaseTool):
    """Base class for tools whose effect is a dispatcher control transfer."""

    direction: ClassVar[str] = ""

    def parse(self, payload: Any) -> BaseModel:
        """Validate a model-supplied payload against the tool's schema."""
        return self.args_schema.model_validate(payload)

    def _run(self, *args: Any, **kwargs: Any) -> str:
        raise ConfigurationError(
            f"'{self.name}' moves control between agents and is carried out by the dispatcher."
        )


class SwitchDomainTool(TransferTool):

    direction: ClassVar[str] = "down"

    name: str = SWITCH_DOMAIN_TOOL_NAME
    description: str = (
        "Call this tool if the user wants help with something a domain specialist handles. "
        "Pass the domain name and a summary of the relevant context."
    )
    args_schema: type[BaseModel] = SwitchDomainInput
    domains: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def for_domains(cls, domains: dict[str, str]) -> "SwitchDomainTool":
        """Build the tool with a description that lists every registered domain."""
        listing = "; ".join(f"'{name}': {about}" for name, about in domains.items())
        description = (
            "Call this tool if the user wants help with something one of these domains "
            f"handles: {listing}. Pass the domain name and a summary of the relevant context."
        )
        return cls(description=description, domains=dict(domains))


class EscalateTool(TransferTool):

    direction: ClassVar[str] = "up"

    name: str = ESCALATE_TOOL_NAME
    description: str = (
        "Call this tool if the user needs something that is outside of your domain. "
        "Pass in a summary of the relevant context."
    )
    args_schema: type[BaseModel] = EscalateInput
