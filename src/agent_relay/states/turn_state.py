"""Typed state definitions used by agents while they take a turn.

``Turn`` is one committed (user, reply) pair in an agent's private history.
``TurnState`` is the scratch state of a turn that is still in flight: the
provisional utterance, the tool-call exchange the model has seen so far and
the counters that bound it. Nothing in a ``TurnState`` reaches the agent's
history unless the turn completes.
"""

from langchain_core.messages import BaseMessage

from typing import TypedDict, List


class Turn(TypedDict):
    """A committed turn.

    Fields
    ------
    user:
        The utterance the agent received (a user line or a handoff summary).
    reply:
        The reply the agent produced for it.
    """
    user: str
    reply: str


class TurnState(TypedDict):
    """In-flight state of ``BaseAgent.advance``.

    Parameters
    ----------
        utterance (str): The provisional user utterance.
        scratchpad (List[BaseMessage]): AI tool-call messages, tool
            observations and correction nudges produced during this turn.
        iterations (int): Tool calls processed so far, transfers included.
        format_retries (int): Malformed-output retries already spent.
    """
    utterance: str
    scratchpad: List[BaseMessage]
    iterations: int
    format_retries: int
