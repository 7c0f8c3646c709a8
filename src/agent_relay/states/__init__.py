from agent_relay.states.turn_state import Turn, TurnState

__all__ = ["Turn", "TurnState"]
