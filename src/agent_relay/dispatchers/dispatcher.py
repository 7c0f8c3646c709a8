"""Concrete dispatcher wiring one general agent to a set of specialists.

Control moves in two directions only. The general agent holds the
``switch_domain`` tool and can hand a conversation down to a specialist;
each specialist holds the ``escalate`` tool and can hand it back up. A
specialist that needs another specialist goes through the general agent,
one hop up and one hop down.

A transfer makes the receiving agent active and immediately advances it
with the handoff summary, so one user-visible turn may pass through two
or three agents. An agent takes part in a turn at most once: a transfer
back to an agent that is still working on the turn is refused, so each
agent commits at most one turn per request. Nested transfers are also
capped at ``max_transfer_depth`` (2 by default, enough for up-then-down).
A refused transfer is reported to the calling model, which is told to
help the user itself.

If the receiving agent's turn fails or is cancelled, the active agent is
restored before the error propagates, and ``handle`` restores the agent
that was active when the request arrived whenever the whole turn fails.
"""

from pydantic import BaseModel

from typing import Iterable, Optional
from typing_extensions import override

from agent_relay.modules.logger import logger
from agent_relay.modules.config import Config
from agent_relay.dispatchers import BaseDispatcher
from agent_relay.constants import TURN_FAILED_REPLY
from agent_relay.agents import BaseAgent, GeneralAgent, SpecialistAgent
from agent_relay.tools import EscalateTool, SwitchDomainTool, TransferTool
from agent_relay.errors import (
    TurnFailed,
    TransferCycle,
    UnknownDomain,
    ConfigurationError,
    TransferLimitReached,
)


class Dispatcher(BaseDispatcher):

    def __init__(
        self,
        general_agent: GeneralAgent,
        specialists: Iterable[SpecialistAgent],
        config: Optional[Config] = None,
    ) -> None:
        super().__init__()
        config = config if config is not None else Config.load()

        self.general_agent = general_agent
        self.specialists: dict[str, SpecialistAgent] = {}
        for specialist in specialists:
            if specialist.domain in self.specialists or specialist.domain == general_agent.name:
                raise ConfigurationError(f"Agent name '{specialist.domain}' is registered twice.")
            self.specialists[specialist.domain] = specialist

        self.max_transfer_depth = config.max_transfer_depth
        self._active: BaseAgent = general_agent
        # agents advancing in the current turn, outermost first
        self._engaged: list[BaseAgent] = []

        self._build_transfer_tools()
        for agent in self.agents():
            agent.attach(self)

    @property
    def active_name(self) -> str:
        """Name of the agent currently holding control."""
        return self._active.name

    @property
    def domains(self) -> list[str]:
        return list(self.specialists)

    @property
    def agent_names(self) -> list[str]:
        return [agent.name for agent in self.agents()]

    def agents(self) -> list[BaseAgent]:
        return [self.general_agent, *self.specialists.values()]

    @override
    def _build_transfer_tools(self) -> None:
        """Give the general agent ``switch_domain`` and every specialist ``escalate``.

        Agents must arrive without transfer tools of their own; handing them
        out here is what keeps control flowing down from the general agent
        and up from the specialists only.
        """
        for agent in self.agents():
            if agent.tools.transfer_tool() is not None:
                raise ConfigurationError(
                    f"Agent '{agent.name}' already has a control-transfer tool; "
                    "transfer tools are assigned by the dispatcher."
                )

        if self.specialists:
            self.general_agent.tools.register(SwitchDomainTool.for_domains(
                {domain: agent.description for domain, agent in self.specialists.items()}
            ))

        for specialist in self.specialists.values():
            specialist.tools.register(EscalateTool())

    @override
    async def handle(self, utterance: str) -> str:
        """Feed one user utterance to the active agent.

        Turn-fatal errors become a plain apology; the error detail goes to
        the log only. Any other exception propagates after the active agent
        has been restored.
        """
        previous = self._active
        self._engaged = [previous]

        try:
            return await previous.advance(utterance)
        except TurnFailed as e:
            self._active = previous
            logger.event(
                "dispatcher.turn.failed",
                agent=e.agent,
                error=type(e).__name__,
                detail=str(e),
                active=self._active.name,
            )
            return TURN_FAILED_REPLY
        except BaseException:
            self._active = previous
            raise
        finally:
            self._engaged = []

    @override
    async def transfer(self, tool: TransferTool, payload: BaseModel, caller: BaseAgent) -> str:
        if isinstance(tool, SwitchDomainTool):
            if payload.domain not in tool.domains:
                logger.event(
                    "dispatcher.transfer.refused",
                    source=caller.name,
                    target=payload.domain,
                    reason="unknown domain",
                )
                raise UnknownDomain(payload.domain, list(tool.domains))
            target = self.specialists[payload.domain]
        elif isinstance(tool, EscalateTool):
            target = self.general_agent
        else:
            raise ConfigurationError(f"Unsupported transfer tool '{tool.name}'.")

        return await self._move(tool, caller, target, payload.summary)

    async def _move(
        self, tool: TransferTool, caller: BaseAgent, target: BaseAgent, summary: str
    ) -> str:
        engaged = self._engaged or [caller]
        if target in engaged:
            logger.event(
                "dispatcher.transfer.refused",
                source=caller.name,
                target=target.name,
                reason="already handling this turn",
            )
            raise TransferCycle(target.name)

        depth = len(engaged)
        if depth > self.max_transfer_depth:
            logger.event(
                "dispatcher.transfer.refused",
                source=caller.name,
                target=target.name,
                reason="depth limit",
            )
            raise TransferLimitReached(self.max_transfer_depth)

        previous = self._active
        logger.event(
            "dispatcher.transfer",
            source=caller.name,
            target=target.name,
            direction=tool.direction,
            depth=str(depth),
            summary=summary,
        )

        self._active = target
        self._engaged.append(target)
        try:
            return await target.advance(summary)
        except BaseException:
            self._active = previous
            raise
        finally:
            self._engaged.remove(target)
