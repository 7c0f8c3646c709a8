from agent_relay.dispatchers.base_dispatcher import BaseDispatcher
from agent_relay.dispatchers.dispatcher import Dispatcher

__all__ = ["BaseDispatcher", "Dispatcher"]
