"""Base class for the conversational agents the dispatcher routes between.

An agent binds together a LangChain chat model, a tool registry, a role
directive and a private conversation history. ``advance`` takes one
utterance and runs the tool-calling loop until the model produces a final
reply:

- the utterance is provisional until the turn completes, so a failed or
  cancelled turn leaves the history untouched;
- every tool call (control transfers included) consumes one iteration of a
  per-turn budget, and asking for more than ``max_iterations`` tool calls
  raises ``ToolLoopExceeded``;
- tool failures, invalid tool input, invented tool names and refused
  transfers are fed back to the model as observations;
- malformed model output is retried once with a correction nudge and then
  answered with a degraded reply;
- a failing or timed-out model call raises ``CompletionUnavailable``.
"""

from pydantic import ValidationError
from langchain_core.tools import BaseTool
from langchain_core.language_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, ToolMessage

import json
import asyncio
from abc import ABC, abstractmethod
from typing import Any, Optional, Self

from agent_relay.modules.logger import logger
from agent_relay.modules.config import Config
from agent_relay.states import Turn, TurnState
from agent_relay.tools import ToolRegistry, TransferTool
from agent_relay.constants import DEGRADED_REPLY, FORMAT_CORRECTION_NUDGE
from agent_relay.errors import (
    UnknownTool,
    UnknownDomain,
    ToolLoopExceeded,
    ConfigurationError,
    MalformedAgentOutput,
    TransferCycle,
    TransferLimitReached,
    CompletionUnavailable,
)


def message_text(message: BaseMessage) -> str:
    """Return the plain text of a message whose content may be a list of blocks."""
    content = message.content
    if isinstance(content, str):
        return content

    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(str(block.get("text", "")))
    return "".join(parts)


def _validation_summary(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'input'}: {err['msg']}"
        for err in error.errors()
    )


class BaseAgent(ABC):
    """Abstract base class for all agents.

    Subclasses implement the factory ``create`` which renders their role
    directive and assembles their tools. The dispatcher attaches itself
    with ``attach`` before any control-transfer tool can be carried out.

    Common attributes:
    - name: unique role name, also the domain name for specialists
    - llm: the LangChain chat model answering for this agent
    - tools: the agent's ``ToolRegistry``
    - history: private list of committed messages, user and reply alternating
    - max_iterations: tool-call ceiling per turn (env MAX_ITERATIONS)
    - completion_timeout / tool_timeout: seconds allowed per call
    """

    max_format_retries: int = 1

    def __init__(
        self,
        name: str,
        llm: BaseChatModel,
        system_prompt: str,
        tools: Optional[ToolRegistry] = None,
        config: Optional[Config] = None,
    ) -> None:
        if not name or not name.strip():
            raise ConfigurationError("Agent name must not be empty.")

        config = config if config is not None else Config.load()
        self.name = name
        self.llm = llm
        self.system_prompt = system_prompt
        self.tools = tools if tools is not None else ToolRegistry()
        self.history: list[BaseMessage] = []
        self.max_iterations = config.max_iterations
        self.completion_timeout = config.completion_timeout
        self.tool_timeout = config.tool_timeout
        self.dispatcher = None

        # The directive is literal text, not a template.
        directive = system_prompt.replace("{", "{{").replace("}", "}}")
        self.prompt = ChatPromptTemplate.from_messages([
            ("system", directive),
            MessagesPlaceholder(variable_name="chat_history"),
            ("human", "{input}"),
            MessagesPlaceholder(variable_name="agent_scratchpad"),
        ])

    @classmethod
    @abstractmethod
    def create(cls, *args: Any, **kwargs: Any) -> Self:
        """Build a configured agent instance.

        Implementations render the agent's role directive and assemble its
        tool registry from a shared catalog.
        """
        ...

    def attach(self, dispatcher: Any) -> None:
        """Give the agent the dispatcher that carries out its transfer tool."""
        self.dispatcher = dispatcher

    @property
    def turns(self) -> list[Turn]:
        messages = self.history
        return [
            Turn(user=message_text(user), reply=message_text(reply))
            for user, reply in zip(messages[::2], messages[1::2])
        ]

    async def advance(self, utterance: str) -> str:
        """Advance the conversation with ``utterance`` and return the reply.

        Raises
        ------
        ToolLoopExceeded
            When the model keeps asking for tools past ``max_iterations``.
        CompletionUnavailable
            When the model call fails or times out.
        """
        logger.log("[Agent]", self.name)
        state = TurnState(utterance=utterance, scratchpad=[], iterations=0, format_retries=0)

        while True:
            response = await self._complete(state)

            try:
                tool_calls = self._parse(response)
            except MalformedAgentOutput as e:
                logger.log("[Malformed Output]", str(e))
                if state["format_retries"] >= self.max_format_retries:
                    reply = DEGRADED_REPLY
                    break
                state["format_retries"] += 1
                state["scratchpad"].append(HumanMessage(content=FORMAT_CORRECTION_NUDGE))
                continue

            if not tool_calls:
                reply = message_text(response)
                break

            state["scratchpad"].append(response)
            for index, call in enumerate(tool_calls):
                if state["iterations"] >= self.max_iterations:
                    raise ToolLoopExceeded(self.name, self.max_iterations)
                state["iterations"] += 1

                observation = await self._run_tool_call(call)
                state["scratchpad"].append(ToolMessage(
                    content=observation,
                    name=call["name"],
                    tool_call_id=call.get("id") or f"{self.name}-{state['iterations']}-{index}",
                ))

        self._commit(utterance, reply)
        logger.log(f"[{self.name} Output]", reply)
        return reply

    # ------------------------- INTERNAL HELPERS ------------------------- #
    async def _complete(self, state: TurnState) -> BaseMessage:
        messages = self.prompt.format_messages(
            input=state["utterance"],
            chat_history=self.history,
            agent_scratchpad=state["scratchpad"],
        )
        model = self.llm.bind_tools(self.tools.tools()) if len(self.tools) else self.llm

        try:
            return await asyncio.wait_for(model.ainvoke(messages), timeout=self.completion_timeout)
        except Exception as e:
            reason = str(e) or type(e).__name__
            logger.log("[Completion Error]", f"{self.name}: {reason}")
            raise CompletionUnavailable(self.name, reason) from e

    def _parse(self, response: BaseMessage) -> list[dict]:
        """Return the requested tool calls, or an empty list for a final reply."""
        if not isinstance(response, AIMessage):
            raise MalformedAgentOutput(self.name, f"unexpected {type(response).__name__}")

        if response.invalid_tool_calls:
            errors = ", ".join(
                f"{call.get('name')}: {call.get('error')}" for call in response.invalid_tool_calls
            )
            raise MalformedAgentOutput(self.name, f"invalid tool call ({errors})")

        if response.tool_calls:
            return list(response.tool_calls)

        if not message_text(response).strip():
            raise MalformedAgentOutput(self.name, "neither a reply nor a tool call")

        return []

    async def _run_tool_call(self, call: dict) -> str:
        name = call["name"]
        args = call.get("args") or {}
        logger.log("[Tool Call]", f"{name} {json.dumps(args, default=str)}")

        try:
            tool = self.tools.resolve(name)
        except UnknownTool:
            return f"{name} is not a valid tool, try one of [{', '.join(self.tools.names())}]."

        if isinstance(tool, TransferTool):
            return await self._transfer(tool, args)

        return await self._invoke(tool, args)

    async def _invoke(self, tool: BaseTool, args: dict) -> str:
        try:
            result = await asyncio.wait_for(tool.ainvoke(args), timeout=self.tool_timeout)
        except ValidationError as e:
            logger.log("[Tool Error]", f"{tool.name}: invalid input: {e}")
            return f"Invalid input for tool '{tool.name}': {_validation_summary(e)}. The tool was not run."
        except TimeoutError:
            logger.log("[Tool Error]", f"{tool.name}: timed out after {self.tool_timeout}s")
            return f"Tool '{tool.name}' did not respond within {self.tool_timeout:g} seconds."
        except Exception as e:
            logger.log("[Tool Error]", f"{tool.name}: {e!r}")
            return f"Tool '{tool.name}' failed: {e}"

        observation = result if isinstance(result, str) else json.dumps(result, default=str)
        logger.log("[Tool Result]", f"{tool.name}: {observation}")
        return observation

    async def _transfer(self, tool: TransferTool, args: dict) -> str:
        try:
            payload = tool.parse(args)
        except ValidationError as e:
            logger.log("[Tool Error]", f"{tool.name}: invalid input: {e}")
            return (
                f"Invalid input for tool '{tool.name}': {_validation_summary(e)}. "
                "Control was not transferred."
            )

        if self.dispatcher is None:
            raise ConfigurationError(
                f"Agent '{self.name}' has no dispatcher to carry out '{tool.name}'."
            )

        try:
            return await self.dispatcher.transfer(tool, payload, caller=self)
        except (UnknownDomain, TransferCycle, TransferLimitReached) as e:
            logger.log("[Transfer Refused]", f"{self.name}: {e}")
            return f"{e} Control was not transferred; help the user directly."

    def _commit(self, utterance: str, reply: str) -> None:
        self.history.extend([HumanMessage(content=utterance), AIMessage(content=reply)])
