"""Specialist agent implementation.

A SpecialistAgent owns one domain (shopping, banking, ...). Its role
directive is rendered from the shared specialist prompt template with the
domain's name and description, and the dispatcher gives it exactly one
control-transfer tool: ``escalate``, which hands the conversation back to
the general agent. Specialists never switch to each other directly.
"""

from langchain_core.tools import BaseTool
from langchain_core.language_models import BaseChatModel

from string import Template
from typing import Iterable, Optional, Self
from typing_extensions import override

from agent_relay.tools import ToolRegistry
from agent_relay.agents import BaseAgent
from agent_relay.modules.config import Config
from agent_relay.errors import ConfigurationError
from agent_relay.constants import GENERAL_AGENT_NAME, SPECIALIST_AGENT_SYSTEM_PROMPT_PATH


class SpecialistAgent(BaseAgent):
    """Agent serving a single domain.

    Attributes
    ----------
    domain:
        The domain name; the general agent passes it to ``switch_domain``.
    description:
        One-line description of the domain, shown to the general agent in
        the ``switch_domain`` tool description.
    """

    def __init__(
        self,
        domain: str,
        description: str,
        llm: BaseChatModel,
        tools: Optional[ToolRegistry] = None,
        config: Optional[Config] = None,
        system_prompt: Optional[str] = None,
    ) -> None:
        if domain == GENERAL_AGENT_NAME:
            raise ConfigurationError(f"'{GENERAL_AGENT_NAME}' is reserved for the general agent.")

        if system_prompt is None:
            with open(str(SPECIALIST_AGENT_SYSTEM_PROMPT_PATH), "r", encoding="utf-8") as f:
                content = Template(f.read())

            system_prompt = content.safe_substitute(domain=domain, description=description)

        super().__init__(domain, llm, system_prompt, tools, config)
        self.domain = domain
        self.description = description

    @override
    @classmethod
    def create(
        cls,
        domain: str,
        description: str,
        llm: BaseChatModel,
        tools: Iterable[BaseTool] = (),
        config: Optional[Config] = None,
        system_prompt: Optional[str] = None,
    ) -> Self:
        """Create a SpecialistAgent for ``domain`` with its domain tools."""
        return cls(domain, description, llm, ToolRegistry(tools), config, system_prompt)
