"""General agent implementation.

The GeneralAgent is the entry point of every session and the only agent
that can hand a conversation down to a domain specialist. Its own tools
are general-purpose; the dispatcher adds the ``switch_domain`` tool once
the specialists are known. It never receives an ``escalate`` tool, so
control can only flow down from it.
"""

from langchain_core.tools import BaseTool
from langchain_core.language_models import BaseChatModel

from string import Template
from typing import Iterable, Optional, Self
from typing_extensions import override

from agent_relay.tools import ToolRegistry
from agent_relay.agents import BaseAgent
from agent_relay.modules.config import Config
from agent_relay.constants import GENERAL_AGENT_NAME, GENERAL_AGENT_SYSTEM_PROMPT_PATH


class GeneralAgent(BaseAgent):
    """Generalist agent that answers directly or routes to a specialist."""

    def __init__(
        self,
        llm: BaseChatModel,
        tools: Optional[ToolRegistry] = None,
        config: Optional[Config] = None,
        system_prompt: Optional[str] = None,
        name: str = GENERAL_AGENT_NAME,
    ) -> None:
        if system_prompt is None:
            with open(str(GENERAL_AGENT_SYSTEM_PROMPT_PATH), "r", encoding="utf-8") as f:
                system_prompt = Template(f.read()).safe_substitute(name=name)

        super().__init__(name, llm, system_prompt, tools, config)

    @override
    @classmethod
    def create(
        cls,
        llm: BaseChatModel,
        tools: Iterable[BaseTool] = (),
        config: Optional[Config] = None,
        system_prompt: Optional[str] = None,
    ) -> Self:
        """Create a GeneralAgent.

        Parameters
        ----------
        llm:
            LangChain chat model used by this agent.
        tools:
            General-purpose tools the agent may call.
        config:
            Settings for iteration ceiling and timeouts; loaded from the
            environment when omitted.
        system_prompt:
            Role directive overriding the bundled prompt file.

        Returns
        -------
        GeneralAgent
            The agent, ready to be handed to a Dispatcher.
        """
        return cls(llm, ToolRegistry(tools), config, system_prompt)
