"""Error taxonomy for the delegation core.

Configuration errors (``UnknownTool``, ``DuplicateToolName``) signal a wiring
bug and are raised at startup. ``UnknownDomain``, ``TransferLimitReached``
and ``TransferCycle`` are reported back to the calling model as observations.
``TurnFailed`` subclasses end the current turn with an apology reply but never the session.
"""

from typing import Iterable, Optional


class RelayError(Exception):
    """Base class for every error raised by agent_relay."""
    pass


class ConfigurationError(RelayError):
    """Raised when agents, tools or the dispatcher are wired incorrectly."""
    pass


class UnknownTool(ConfigurationError):
    """Raised when a tool name cannot be resolved in a registry."""

    def __init__(self, name: str, available: Iterable[str] = ()) -> None:
        self.name = name
        self.available = list(available)
        super().__init__(f"Unknown tool '{name}'. Available tools: {self.available}")


class DuplicateToolName(ConfigurationError):
    """Raised when a registry already holds a tool with the same name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"A tool named '{name}' is already registered.")


class UnknownDomain(RelayError):
    """Raised when a downward transfer targets a domain nobody serves."""

    def __init__(self, domain: str, available: Iterable[str] = ()) -> None:
        self.domain = domain
        self.available = list(available)
        super().__init__(
            f"Unknown domain '{domain}'. Registered domains: {self.available}"
        )


class TransferLimitReached(RelayError):
    """Raised when a transfer would exceed the nested transfer depth."""

    def __init__(self, depth: int) -> None:
        self.depth = depth
        super().__init__(f"Transfer depth limit of {depth} reached.")


class TransferCycle(RelayError):
    """Raised when a transfer targets an agent already handling the current turn."""

    def __init__(self, agent: str) -> None:
        self.agent = agent
        super().__init__(f"Agent '{agent}' is already handling this request.")


class MalformedAgentOutput(RelayError):
    """Raised when the model answers with neither a reply nor a usable tool call."""

    def __init__(self, agent: str, detail: str) -> None:
        self.agent = agent
        self.detail = detail
        super().__init__(f"Agent '{agent}' produced malformed output: {detail}")


class TurnFailed(RelayError):
    """A condition that aborts the current turn without ending the session."""

    def __init__(self, agent: str, message: str) -> None:
        self.agent = agent
        super().__init__(message)


class ToolLoopExceeded(TurnFailed):

    def __init__(self, agent: str, max_iterations: int) -> None:
        self.max_iterations = max_iterations
        super().__init__(
            agent,
            f"Agent '{agent}' requested more than {max_iterations} tool calls in one turn.",
        )


class CompletionUnavailable(TurnFailed):

    def __init__(self, agent: str, reason: Optional[str] = None) -> None:
        self.reason = reason
        super().__init__(
            agent,
            f"Completion service unavailable for agent '{agent}': {reason or 'unknown error'}",
        )
