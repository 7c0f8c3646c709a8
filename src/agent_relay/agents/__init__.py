from agent_relay.agents.base_agent import BaseAgent, message_text
from agent_relay.agents.general_agent import GeneralAgent
from agent_relay.agents.specialist_agent import SpecialistAgent

__all__ = ["BaseAgent", "GeneralAgent", "SpecialistAgent", "message_text"]
