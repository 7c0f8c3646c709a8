"""Abstract base for dispatchers.

A dispatcher owns a set of agents and the single field naming which of
them currently holds control. It implements a small contract: hand out
the control-transfer tools, route one user utterance to the active agent,
and carry out the transfers those tools request.
"""

from pydantic import BaseModel

from abc import ABC, abstractmethod

from agent_relay.agents import BaseAgent
from agent_relay.tools import TransferTool


class BaseDispatcher(ABC):

    def __init__(self, *args, **kwargs) -> None:
        super().__init__()

    @abstractmethod
    def _build_transfer_tools(self) -> None:
        """Register the control-transfer pseudo-tools on the agents."""
        ...

    @abstractmethod
    async def handle(self, utterance: str) -> str:
        """Route one user utterance to the active agent and return its reply."""
        ...

    @abstractmethod
    async def transfer(self, tool: TransferTool, payload: BaseModel, caller: BaseAgent) -> str:
        """Carry out a control transfer requested by ``caller`` through ``tool``.

        Returns the receiving agent's reply, which becomes the tool result
        seen by the caller.
        """
        ...
